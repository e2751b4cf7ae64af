"""Tile classification: map a field value into a biome's tile-index range."""

import numpy as np
from numpy.typing import NDArray

from .fields import ELEVATION_RANGE, SHAPE_RANGE, TemperatureField
from .matrix import Tile, TileMatrix
from .scaling import clamp_index, scale, scale_to_index
from .settings import BiomeTileRange, MapMode, Settings

ELEVATION_BIOME = "Elevation"
TEMPERATURE_BIOME = "Temperature"

# Map mode -> (tile field, biome name)
MODE_SOURCES: dict[MapMode, tuple[str, str]] = {
    MapMode.ELEVATION: ("elevation", ELEVATION_BIOME),
    MapMode.TEMPERATURE: ("temperature", TEMPERATURE_BIOME),
    MapMode.WORLD_SHAPE: ("shape", ELEVATION_BIOME),
}


def tile_index(
    value: float,
    value_range: tuple[float, float],
    tile_range: BiomeTileRange,
) -> int:
    """Map a field value to an index in tile_range.

    The value is clamped into value_range before scaling and the index is
    clamped again afterwards, since rounding can land one step outside the
    target range.

    Args:
        value: Field value.
        value_range: (min, max) of the field.
        tile_range: Target biome tile range.

    Returns:
        Index in [tile_range.start_index, tile_range.end_index].
    """
    low, high = value_range
    first, last = tile_range.start_index, tile_range.end_index
    clamped = min(max(value, low), high)
    index = scale_to_index(clamped, low, high, first, last)
    return clamp_index(index, first, last)


def field_range(mode: MapMode, settings: Settings) -> tuple[float, float]:
    """Classification range of the field that drives mode."""
    if mode == MapMode.TEMPERATURE:
        return TemperatureField().value_range(settings)
    if mode == MapMode.ELEVATION:
        return ELEVATION_RANGE
    return SHAPE_RANGE


class TileClassifier:
    """Classifies tiles for one settings snapshot.

    Resolves the biome range and value range up front, so a missing biome
    fails before any cell is classified.

    Raises:
        BiomeNotFoundError: If the mode's biome is not in the table.
    """

    def __init__(self, settings: Settings, mode: MapMode | None = None):
        self.mode = mode or settings.mode
        self.field_name, self.biome_name = MODE_SOURCES[self.mode]
        self.tile_range = settings.biome(self.biome_name)
        self.value_range = field_range(self.mode, settings)

    def classify(self, tile: Tile) -> int:
        """Tile index for one tile."""
        return tile_index(getattr(tile, self.field_name), self.value_range, self.tile_range)

    def classify_matrix(self, matrix: TileMatrix) -> NDArray[np.uint32]:
        """Tile indices for every cell, shape (height, width)."""
        low, high = self.value_range
        first, last = self.tile_range.start_index, self.tile_range.end_index

        values = np.clip(matrix.field(self.field_name), low, high)
        scaled = scale(values, low, high, first, last)
        # Round half away from zero, matching scale_to_index
        indices = np.sign(scaled) * np.floor(np.abs(scaled) + 0.5)
        return np.clip(indices, first, last).astype(np.uint32)


def classify_tile(tile: Tile, settings: Settings) -> int:
    """Tile index for tile under the settings' current mode."""
    return TileClassifier(settings).classify(tile)
