"""Field generators: elevation, temperature, and world shape.

Each generator writes one Tile field and knows the value range the classifier
maps into a biome's tile range. Generators write disjoint fields, so they can
be applied in any order. ``apply`` fills one tile; ``apply_grid`` fills the
whole matrix at once with the same values.
"""

import numpy as np
from numpy.typing import NDArray

from .matrix import Tile, TileMatrix
from .noise import NoiseSampler
from .projection import grid_lonlat, xy_to_lonlat
from .settings import NoiseConfig, Settings
from .shapes import ShapeGenerator

# Constant shift applied to temperatures
TEMPERATURE_BASE = -10.0

# Classification ranges for fields that are not analytically bounded
ELEVATION_RANGE = (-1.0, 1.0)
SHAPE_RANGE = (-1.0, 1.0)


class FieldGenerator:
    """Base class: writes a single Tile field."""

    field_name: str

    def apply(self, tile: Tile, x: int, y: int, settings: Settings) -> None:
        setattr(tile, self.field_name, self.value(x, y, settings))

    def apply_grid(self, matrix: TileMatrix, settings: Settings) -> None:
        matrix.set_field(self.field_name, self.grid(settings))

    def value(self, x: int, y: int, settings: Settings) -> float:
        raise NotImplementedError

    def grid(self, settings: Settings) -> NDArray[np.float64]:
        """Field values for every cell, shape (height, width)."""
        raise NotImplementedError

    def value_range(self, settings: Settings) -> tuple[float, float]:
        raise NotImplementedError


class _NoiseField(FieldGenerator):
    """Caches the sampler for the current noise config."""

    def __init__(self) -> None:
        self._sampler: NoiseSampler | None = None

    def _get_sampler(self, config: NoiseConfig) -> NoiseSampler:
        # Configs are frozen; a change always brings a new object
        if self._sampler is None or self._sampler.config is not config:
            self._sampler = NoiseSampler(config)
        return self._sampler

    def _sample(self, config: NoiseConfig, x: int, y: int) -> float:
        return self._get_sampler(config).sample(x, y)

    def _sample_grid(self, config: NoiseConfig, settings: Settings) -> NDArray[np.float64]:
        return self._get_sampler(config).sample_grid(settings.width, settings.height)


class ElevationField(_NoiseField):
    """Raw fractal elevation, optionally lowered by the world-shape mask."""

    field_name = "elevation"

    def __init__(self, shape_generator: ShapeGenerator):
        super().__init__()
        self.shape_generator = shape_generator

    def value(self, x: int, y: int, settings: Settings) -> float:
        elevation = self._sample(settings.elevation, x, y)
        if settings.shaped_world:
            shape_value = self.shape_generator.generate(x, y, settings)
            elevation -= shape_value * settings.shape.shape_factor
        return elevation

    def grid(self, settings: Settings) -> NDArray[np.float64]:
        elevation = self._sample_grid(settings.elevation, settings)
        if settings.shaped_world:
            mask = self.shape_generator.generate_grid(settings)
            elevation -= mask * settings.shape.shape_factor
        return elevation

    def value_range(self, settings: Settings) -> tuple[float, float]:
        return ELEVATION_RANGE


class TemperatureField(_NoiseField):
    """Latitude band (warm equator, cold poles) plus noise."""

    field_name = "temperature"

    def value(self, x: int, y: int, settings: Settings) -> float:
        config = settings.temperature
        _, lat = xy_to_lonlat(settings, x, y)
        noise_value = self._sample(config.noise, x, y)
        return float(
            temperature(lat, noise_value, config.scale_lat_factor, config.noise_factor)
        )

    def grid(self, settings: Settings) -> NDArray[np.float64]:
        config = settings.temperature
        _, lat = grid_lonlat(settings)
        noise_values = self._sample_grid(config.noise, settings)
        return temperature(
            lat[:, np.newaxis],
            noise_values,
            config.scale_lat_factor,
            config.noise_factor,
        )

    def value_range(self, settings: Settings) -> tuple[float, float]:
        """Analytic range: latitude +-90 with noise -1, latitude 0 with noise +1."""
        config = settings.temperature
        coldest = temperature(90.0, -1.0, config.scale_lat_factor, config.noise_factor)
        hottest = temperature(0.0, 1.0, config.scale_lat_factor, config.noise_factor)
        return float(min(coldest, hottest)), float(max(coldest, hottest))


class WorldShapeField(FieldGenerator):
    """World-shape mask from the active shape generator."""

    field_name = "shape"

    def __init__(self, shape_generator: ShapeGenerator):
        self.shape_generator = shape_generator

    def value(self, x: int, y: int, settings: Settings) -> float:
        return self.shape_generator.generate(x, y, settings)

    def grid(self, settings: Settings) -> NDArray[np.float64]:
        return self.shape_generator.generate_grid(settings)

    def value_range(self, settings: Settings) -> tuple[float, float]:
        return SHAPE_RANGE


def temperature(lat, noise_value, scale_lat_factor: float, noise_factor: float):
    """Blend latitude and noise into a temperature.

    Works on floats and on broadcastable numpy arrays.
    """
    lat_term = np.cos(np.radians(lat)) * scale_lat_factor
    noise_term = (noise_value + 1.0) * noise_factor
    return lat_term + noise_term + TEMPERATURE_BASE


def make_field_generators(shape_generator: ShapeGenerator) -> list[FieldGenerator]:
    """All field generators, sharing one shape generator."""
    return [
        ElevationField(shape_generator),
        TemperatureField(),
        WorldShapeField(shape_generator),
    ]
