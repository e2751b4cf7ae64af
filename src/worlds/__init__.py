"""Procedural world field generation and tile classification."""

from .classification import TileClassifier, classify_tile, tile_index
from .exceptions import (
    BiomeNotFoundError,
    ConfigurationError,
    GenerationError,
    OutOfBoundsError,
    ShapeGeneratorError,
    WorldsError,
)
from .fields import ElevationField, TemperatureField, WorldShapeField
from .generator import (
    GenerationResult,
    WorldMap,
    classify_tiles,
    generate_map,
    generate_tiles,
)
from .matrix import Tile, TileMatrix
from .noise import MAX_NOISE_SCALE, NoiseSampler, fractal_noise
from .projection import grid_lonlat, lonlat_to_xy, xy_to_lonlat
from .scaling import clamp_index, scale, scale_to_index
from .settings import (
    BiomeTileRange,
    MapMode,
    NoiseConfig,
    Settings,
    ShapeConfig,
    ShapeKind,
    TemperatureConfig,
    load_settings,
)
from .shapes import (
    CenteredCircleShape,
    ContinentsShape,
    ShapeGenerator,
    create_shape_generator,
    make_shape_generator,
)

__all__ = [
    # Settings
    "Settings",
    "NoiseConfig",
    "TemperatureConfig",
    "ShapeConfig",
    "ShapeKind",
    "MapMode",
    "BiomeTileRange",
    "load_settings",
    # Scaling and projection
    "scale",
    "scale_to_index",
    "clamp_index",
    "xy_to_lonlat",
    "lonlat_to_xy",
    "grid_lonlat",
    # Noise
    "MAX_NOISE_SCALE",
    "NoiseSampler",
    "fractal_noise",
    # Shapes
    "ShapeGenerator",
    "CenteredCircleShape",
    "ContinentsShape",
    "make_shape_generator",
    "create_shape_generator",
    # Fields
    "ElevationField",
    "TemperatureField",
    "WorldShapeField",
    # Tiles
    "Tile",
    "TileMatrix",
    # Classification
    "TileClassifier",
    "classify_tile",
    "tile_index",
    # Generation
    "GenerationResult",
    "WorldMap",
    "generate_tiles",
    "classify_tiles",
    "generate_map",
    # Exceptions
    "WorldsError",
    "ConfigurationError",
    "BiomeNotFoundError",
    "OutOfBoundsError",
    "ShapeGeneratorError",
    "GenerationError",
]
