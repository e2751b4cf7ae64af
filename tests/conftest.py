"""Shared test fixtures for world generation tests."""

import pytest

from worlds.settings import (
    BiomeTileRange,
    MapMode,
    NoiseConfig,
    Settings,
    ShapeConfig,
    ShapeKind,
    TemperatureConfig,
)


@pytest.fixture
def elevation_config() -> NoiseConfig:
    """Single-octave elevation noise with a fixed seed and no offset."""
    return NoiseConfig(
        seed=1,
        noise_scale=10.0,
        octaves=1,
        lacunarity=2.0,
        persistence=0.5,
        offset=(0.0, 0.0),
    )


@pytest.fixture
def biomes() -> dict[str, BiomeTileRange]:
    """Tile-range table with Elevation and Temperature biomes."""
    return {
        "Elevation": BiomeTileRange(start_index=0, length=10),
        "Temperature": BiomeTileRange(start_index=10, length=5),
    }


@pytest.fixture
def small_settings(
    elevation_config: NoiseConfig, biomes: dict[str, BiomeTileRange]
) -> Settings:
    """Deterministic 4x4 settings in elevation mode, centered-circle shape."""
    return Settings(
        width=4,
        height=4,
        mode=MapMode.ELEVATION,
        shape=ShapeConfig(kind=ShapeKind.CENTERED_CIRCLE),
        elevation=elevation_config,
        temperature=TemperatureConfig(
            noise=NoiseConfig(
                seed=2,
                noise_scale=20.0,
                octaves=2,
                lacunarity=2.0,
                persistence=0.5,
                offset=(0.0, 0.0),
            )
        ),
        biomes=biomes,
    )


@pytest.fixture
def grid_settings(small_settings: Settings) -> Settings:
    """Deterministic 16x12 settings with a continents shape."""
    small_settings.update(
        width=16,
        height=12,
        shape={"kind": ShapeKind.CONTINENTS, "shape_radius": 6.0},
    )
    return small_settings
