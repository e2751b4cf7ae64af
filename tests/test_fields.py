"""Tests for field generators."""

import math

import numpy as np
import pytest

from worlds.fields import (
    ELEVATION_RANGE,
    ElevationField,
    TemperatureField,
    WorldShapeField,
    make_field_generators,
    temperature,
)
from worlds.matrix import Tile, TileMatrix
from worlds.noise import NoiseSampler
from worlds.projection import xy_to_lonlat
from worlds.settings import Settings
from worlds.shapes import create_shape_generator


class TestElevationField:
    """Tests for the elevation generator."""

    def test_unshaped_is_raw_noise(self, small_settings: Settings) -> None:
        """Without shaping, elevation is the raw fractal value."""
        small_settings.shaped_world = False
        field = ElevationField(create_shape_generator(small_settings))
        tile = Tile()
        field.apply(tile, 1, 2, small_settings)
        assert tile.elevation == NoiseSampler(small_settings.elevation).sample(1, 2)

    def test_shaped_subtracts_mask(self, small_settings: Settings) -> None:
        """With shaping, elevation -= mask * shape_factor."""
        shape = create_shape_generator(small_settings)
        field = ElevationField(shape)
        tile = Tile()
        field.apply(tile, 0, 0, small_settings)

        raw = NoiseSampler(small_settings.elevation).sample(0, 0)
        mask = shape.generate(0, 0, small_settings)
        expected = raw - mask * small_settings.shape.shape_factor
        assert tile.elevation == pytest.approx(expected)

    def test_writes_only_elevation(self, small_settings: Settings) -> None:
        """Other tile fields are untouched."""
        field = ElevationField(create_shape_generator(small_settings))
        tile = Tile(temperature=3.0, shape=0.5)
        field.apply(tile, 2, 2, small_settings)
        assert tile.temperature == 3.0
        assert tile.shape == 0.5

    def test_range(self, small_settings: Settings) -> None:
        """Elevation is classified over [-1, 1]."""
        field = ElevationField(create_shape_generator(small_settings))
        assert field.value_range(small_settings) == ELEVATION_RANGE == (-1.0, 1.0)

    def test_follows_config_change(self, small_settings: Settings) -> None:
        """A new noise config is picked up on the next call."""
        small_settings.shaped_world = False
        field = ElevationField(create_shape_generator(small_settings))
        before = field.value(3, 1, small_settings)
        small_settings.update(elevation={"seed": 12345})
        after = field.value(3, 1, small_settings)
        assert after == NoiseSampler(small_settings.elevation).sample(3, 1)
        assert before != after


class TestTemperatureField:
    """Tests for the temperature generator."""

    def test_formula(self, small_settings: Settings) -> None:
        """Temperature blends cos(latitude) and noise, minus 10."""
        field = TemperatureField()
        tile = Tile()
        field.apply(tile, 1, 3, small_settings)

        config = small_settings.temperature
        _, lat = xy_to_lonlat(small_settings, 1, 3)
        noise_value = NoiseSampler(config.noise).sample(1, 3)
        expected = (
            math.cos(math.radians(lat)) * config.scale_lat_factor
            + (noise_value + 1) * config.noise_factor
            - 10
        )
        assert tile.temperature == pytest.approx(expected)

    def test_analytic_range(self, small_settings: Settings) -> None:
        """Range runs from pole/noise -1 to equator/noise +1."""
        low, high = TemperatureField().value_range(small_settings)
        # Defaults: lat factor 40, noise factor 20
        assert low == pytest.approx(-10.0)
        assert high == pytest.approx(40.0 + 40.0 - 10.0)

    def test_values_within_range(self, small_settings: Settings) -> None:
        """Generated temperatures lie within the analytic range."""
        small_settings.update(width=12, height=9, temperature={"noise": {"octaves": 1}})
        field = TemperatureField()
        low, high = field.value_range(small_settings)
        for x in range(12):
            for y in range(9):
                value = field.value(x, y, small_settings)
                assert low - 1e-9 <= value <= high + 1e-9

    def test_range_ordered_for_negative_factors(self, small_settings: Settings) -> None:
        """Negative factors still yield an ascending range."""
        small_settings.update(temperature={"scale_lat_factor": -80.0})
        low, high = TemperatureField().value_range(small_settings)
        assert low < high

    def test_helper_at_equator_and_pole(self) -> None:
        """temperature() at the extremes."""
        assert temperature(0.0, 1.0, 40.0, 20.0) == pytest.approx(70.0)
        assert temperature(90.0, -1.0, 40.0, 20.0) == pytest.approx(-10.0)


class TestWorldShapeField:
    """Tests for the world shape field."""

    def test_delegates_to_shape_generator(self, small_settings: Settings) -> None:
        """tile.shape is the shape generator's value."""
        shape = create_shape_generator(small_settings)
        tile = Tile()
        WorldShapeField(shape).apply(tile, 3, 1, small_settings)
        assert tile.shape == shape.generate(3, 1, small_settings)


class TestFieldOrder:
    """Field generators write disjoint fields."""

    def test_order_independent(self, small_settings: Settings) -> None:
        """Applying generators in reverse order gives the same tile."""
        shape = create_shape_generator(small_settings)
        generators = make_field_generators(shape)

        forward, backward = Tile(), Tile()
        for generator in generators:
            generator.apply(forward, 2, 1, small_settings)
        for generator in reversed(generators):
            generator.apply(backward, 2, 1, small_settings)

        assert forward == backward


class TestFieldGrid:
    """Whole-grid evaluation of each field."""

    @pytest.mark.parametrize("field_type", ["elevation", "temperature", "shape"])
    def test_grid_matches_value(self, grid_settings: Settings, field_type: str) -> None:
        """grid() equals value() at every cell."""
        shape = create_shape_generator(grid_settings)
        field = {
            "elevation": ElevationField(shape),
            "temperature": TemperatureField(),
            "shape": WorldShapeField(shape),
        }[field_type]

        grid = field.grid(grid_settings)

        assert grid.shape == (grid_settings.height, grid_settings.width)
        expected = np.array(
            [
                [field.value(x, y, grid_settings) for x in range(grid_settings.width)]
                for y in range(grid_settings.height)
            ]
        )
        np.testing.assert_allclose(grid, expected, rtol=0, atol=1e-12)

    def test_apply_grid_writes_only_its_field(self, grid_settings: Settings) -> None:
        """apply_grid replaces one field array of the matrix."""
        matrix = TileMatrix(grid_settings.width, grid_settings.height)
        TemperatureField().apply_grid(matrix, grid_settings)
        assert np.any(matrix.field("temperature") != 0.0)
        np.testing.assert_array_equal(matrix.field("elevation"), 0.0)
        np.testing.assert_array_equal(matrix.field("shape"), 0.0)

    def test_temperature_helper_broadcasts(self) -> None:
        """temperature() accepts a latitude column and a noise grid."""
        lat = np.array([[0.0], [90.0]])
        noise = np.array([[1.0, -1.0], [1.0, -1.0]])
        values = temperature(lat, noise, 40.0, 20.0)
        np.testing.assert_allclose(values, [[70.0, 30.0], [30.0, -10.0]], atol=1e-12)
