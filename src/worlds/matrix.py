"""Per-cell tile records and the dense tile matrix."""

from dataclasses import dataclass, fields
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from .exceptions import OutOfBoundsError


@dataclass
class Tile:
    """Generated values for one grid cell."""

    elevation: float = 0.0
    temperature: float = 0.0
    shape: float = 0.0


TILE_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(Tile))


class TileMatrix:
    """Dense width x height store of Tile values.

    Each Tile field is backed by its own float64 array of shape
    (height, width); Tile objects are built on demand.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid matrix size {width}x{height}")
        self.width = width
        self.height = height
        self._fields: dict[str, NDArray[np.float64]] = {
            name: np.zeros((height, width), dtype=np.float64) for name in TILE_FIELDS
        }

    @property
    def shape(self) -> tuple[int, int]:
        """Array shape (height, width)."""
        return self.height, self.width

    def __len__(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) addresses a cell."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Tile | None:
        """Get the tile at (x, y), or None if out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return Tile(**{name: float(arr[y, x]) for name, arr in self._fields.items()})

    def set(self, x: int, y: int, tile: Tile) -> None:
        """Store tile at (x, y).

        Raises:
            OutOfBoundsError: If (x, y) is outside the matrix.
        """
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(
                f"Position ({x}, {y}) out of bounds for "
                f"{self.width}x{self.height} matrix"
            )
        for name, arr in self._fields.items():
            arr[y, x] = getattr(tile, name)

    def field(self, name: str) -> NDArray[np.float64]:
        """Backing array for one Tile field, shape (height, width)."""
        try:
            return self._fields[name]
        except KeyError:
            raise KeyError(f"Unknown tile field '{name}'") from None

    def set_field(self, name: str, values: NDArray[np.float64]) -> None:
        """Replace a whole field array."""
        if values.shape != self.shape:
            raise ValueError(
                f"Field shape {values.shape} doesn't match matrix shape {self.shape}"
            )
        self.field(name)[...] = values

    def cells(self) -> Iterator[tuple[int, int]]:
        """Iterate (x, y) over all cells, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def __iter__(self) -> Iterator[tuple[int, int, Tile]]:
        for x, y in self.cells():
            yield x, y, self.get(x, y)
