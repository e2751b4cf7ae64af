"""Colour ramps for previewing generated fields.

Each ramp splits the normalized field range into equal buckets; a value
takes the colour of the first bucket whose upper edge it does not exceed,
skipping the first stop. Values above the last edge render white.
"""

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from .classification import MODE_SOURCES, field_range
from .matrix import TileMatrix
from .scaling import scale
from .settings import MapMode, Settings

RGB = tuple[int, int, int]

ELEVATION_STOPS: list[RGB] = [
    (89, 127, 198),
    (83, 158, 216),
    (79, 171, 226),
    (39, 194, 245),
    (79, 205, 248),
    (112, 208, 245),
    (141, 216, 248),
    (158, 217, 204),
    (196, 216, 190),
    (224, 219, 177),
    (254, 227, 168),
    (252, 194, 128),
    (229, 159, 89),
    (210, 133, 55),
    (195, 106, 26),
    (202, 102, 27),
    (211, 88, 31),
]

TEMPERATURE_STOPS: list[RGB] = [
    (124, 64, 255),
    (59, 57, 230),
    (63, 65, 252),
    (65, 145, 247),
    (64, 197, 252),
    (177, 255, 64),
    (254, 254, 65),
    (254, 211, 66),
    (252, 166, 63),
    (255, 115, 64),
    (255, 70, 64),
    (162, 41, 40),
    (121, 29, 30),
]

OVERFLOW_COLOR: RGB = (255, 255, 255)

MODE_STOPS: dict[MapMode, list[RGB]] = {
    MapMode.ELEVATION: ELEVATION_STOPS,
    MapMode.TEMPERATURE: TEMPERATURE_STOPS,
    MapMode.WORLD_SHAPE: ELEVATION_STOPS,
}


def _lut(stops: list[RGB]) -> tuple[NDArray[np.float64], NDArray[np.uint8]]:
    n = len(stops)
    edges = np.arange(1, n, dtype=np.float64) / n
    colors = np.array(stops[1:] + [OVERFLOW_COLOR], dtype=np.uint8)
    return edges, colors


def colorize(
    values: NDArray[np.float64],
    low: float,
    high: float,
    stops: list[RGB],
) -> NDArray[np.uint8]:
    """Map a field array to RGB colours.

    Returns:
        Array of shape values.shape + (3,), dtype uint8.
    """
    edges, colors = _lut(stops)
    normalized = scale(values, low, high, 0.0, 1.0)
    buckets = np.searchsorted(edges, normalized, side="left")
    return colors[buckets]


def field_color(value: float, low: float, high: float, stops: list[RGB]) -> RGB:
    """Colour for a single field value."""
    r, g, b = colorize(np.array([value]), low, high, stops)[0]
    return int(r), int(g), int(b)


def render_preview(
    matrix: TileMatrix,
    settings: Settings,
    mode: MapMode | None = None,
) -> Image.Image:
    """Render one pixel per cell for the field behind mode."""
    mode = mode or settings.mode
    field_name, _ = MODE_SOURCES[mode]
    low, high = field_range(mode, settings)

    pixels = colorize(matrix.field(field_name), low, high, MODE_STOPS[mode])
    return Image.fromarray(pixels)
