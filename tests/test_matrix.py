"""Tests for Tile and TileMatrix."""

import numpy as np
import pytest

from worlds.exceptions import OutOfBoundsError, WorldsError
from worlds.matrix import TILE_FIELDS, Tile, TileMatrix


class TestTile:
    """Tests for the Tile record."""

    def test_defaults(self) -> None:
        """Tile fields start at zero."""
        tile = Tile()
        assert tile.elevation == 0.0
        assert tile.temperature == 0.0
        assert tile.shape == 0.0

    def test_mutable(self) -> None:
        """Field generators write into tiles in place."""
        tile = Tile()
        tile.elevation = 0.3
        assert tile.elevation == 0.3

    def test_field_names(self) -> None:
        """TILE_FIELDS lists the Tile fields in order."""
        assert TILE_FIELDS == ("elevation", "temperature", "shape")


class TestTileMatrix:
    """Tests for TileMatrix."""

    def test_size_is_width_times_height(self) -> None:
        """Matrix holds exactly width*height cells."""
        matrix = TileMatrix(7, 3)
        assert len(matrix) == 21
        assert matrix.shape == (3, 7)
        assert len(list(matrix.cells())) == 21

    def test_rejects_empty_size(self) -> None:
        """Zero dimensions are rejected."""
        with pytest.raises(ValueError):
            TileMatrix(0, 5)

    def test_set_then_get(self) -> None:
        """A stored tile is returned by get."""
        matrix = TileMatrix(4, 4)
        matrix.set(2, 3, Tile(elevation=0.5, temperature=12.0, shape=-0.25))
        assert matrix.get(2, 3) == Tile(elevation=0.5, temperature=12.0, shape=-0.25)

    def test_row_major_layout(self) -> None:
        """Field arrays are indexed [y, x]."""
        matrix = TileMatrix(4, 2)
        matrix.set(3, 1, Tile(elevation=1.0))
        assert matrix.field("elevation")[1, 3] == 1.0
        assert matrix.field("elevation").sum() == 1.0

    def test_get_returns_copy(self) -> None:
        """Mutating a returned tile doesn't change the matrix."""
        matrix = TileMatrix(2, 2)
        tile = matrix.get(0, 0)
        tile.elevation = 9.0
        assert matrix.get(0, 0).elevation == 0.0

    @pytest.mark.parametrize("x,y", [(4, 0), (0, 3), (-1, 0), (0, -1), (10, 10)])
    def test_get_out_of_bounds_is_none(self, x: int, y: int) -> None:
        """get outside the grid returns None."""
        matrix = TileMatrix(4, 3)
        assert matrix.get(x, y) is None

    @pytest.mark.parametrize("x,y", [(4, 0), (0, 3), (-1, 0), (0, -1)])
    def test_set_out_of_bounds_raises(self, x: int, y: int) -> None:
        """set outside the grid fails instead of wrapping."""
        matrix = TileMatrix(4, 3)
        with pytest.raises(OutOfBoundsError):
            matrix.set(x, y, Tile(elevation=1.0))
        assert matrix.field("elevation").sum() == 0.0

    def test_out_of_bounds_error_types(self) -> None:
        """OutOfBoundsError is both a WorldsError and an IndexError."""
        assert issubclass(OutOfBoundsError, WorldsError)
        assert issubclass(OutOfBoundsError, IndexError)

    def test_unknown_field(self) -> None:
        """Unknown field names raise KeyError."""
        with pytest.raises(KeyError):
            TileMatrix(2, 2).field("humidity")

    def test_set_field(self) -> None:
        """set_field replaces a whole field array."""
        matrix = TileMatrix(3, 2)
        values = np.arange(6, dtype=np.float64).reshape(2, 3)
        matrix.set_field("temperature", values)
        assert matrix.get(2, 1).temperature == 5.0

    def test_set_field_shape_mismatch(self) -> None:
        """set_field rejects arrays of the wrong shape."""
        with pytest.raises(ValueError):
            TileMatrix(3, 2).set_field("temperature", np.zeros((3, 2)))

    def test_iteration_order(self) -> None:
        """Iteration yields (x, y, tile) row by row."""
        matrix = TileMatrix(2, 2)
        coords = [(x, y) for x, y, _ in matrix]
        assert coords == [(0, 0), (1, 0), (0, 1), (1, 1)]
