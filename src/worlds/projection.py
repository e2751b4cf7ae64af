"""Grid <-> geographic coordinate projection.

x runs west to east over [-180, 180] degrees of longitude and y runs south to
north over [-90, 90] degrees of latitude.
"""

import numpy as np
from numpy.typing import NDArray

from .scaling import scale
from .settings import Settings

LON_MIN, LON_MAX = -180.0, 180.0
LAT_MIN, LAT_MAX = -90.0, 90.0


def xy_to_lonlat(settings: Settings, x: int, y: int) -> tuple[float, float]:
    """Project a grid cell to (longitude, latitude).

    A dimension with a single cell projects to 0 degrees.
    """
    x_max = settings.width - 1
    y_max = settings.height - 1

    lon = scale(float(x), 0.0, x_max, LON_MIN, LON_MAX) if x_max > 0 else 0.0
    lat = scale(float(y), 0.0, y_max, LAT_MIN, LAT_MAX) if y_max > 0 else 0.0

    return lon, lat


def lonlat_to_xy(settings: Settings, lon: float, lat: float) -> tuple[int, int]:
    """Project (longitude, latitude) back to a grid cell, truncating."""
    x_max = settings.width - 1
    y_max = settings.height - 1

    x = scale(lon, LON_MIN, LON_MAX, 0.0, x_max)
    y = scale(lat, LAT_MIN, LAT_MAX, 0.0, y_max)

    return int(x), int(y)


def grid_lonlat(
    settings: Settings,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Longitude of every column and latitude of every row.

    Returns:
        Tuple of (lon, lat) with shapes (width,) and (height,).
    """
    xs = np.arange(settings.width, dtype=np.float64)
    ys = np.arange(settings.height, dtype=np.float64)
    x_max = settings.width - 1
    y_max = settings.height - 1

    lon = scale(xs, 0.0, x_max, LON_MIN, LON_MAX) if x_max > 0 else np.zeros(1)
    lat = scale(ys, 0.0, y_max, LAT_MIN, LAT_MAX) if y_max > 0 else np.zeros(1)

    return lon, lat
