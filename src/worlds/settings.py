"""Generation settings: noise, shape, biome tile ranges, and TOML loading."""

import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any

import numpy as np
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    WrapSerializer,
)

from .exceptions import BiomeNotFoundError, ConfigurationError

MAX_SEED = 2**32 - 1
OFFSET_RANGE = 100_000


def _random_seed() -> int:
    return int(np.random.default_rng().integers(0, MAX_SEED, endpoint=True))


def _random_offset() -> tuple[float, float]:
    rng = np.random.default_rng()
    x, y = rng.integers(-OFFSET_RANGE, OFFSET_RANGE, size=2)
    return float(x), float(y)


class MapMode(str, Enum):
    """Which generated field drives the final tile selection."""

    ELEVATION = "elevation"
    TEMPERATURE = "temperature"
    WORLD_SHAPE = "world_shape"


class ShapeKind(str, Enum):
    """Available world-shape mask generators."""

    CENTERED_CIRCLE = "centered_circle"
    CONTINENTS = "continents"


class NoiseConfig(BaseModel, frozen=True):
    """Fractal noise parameters for a single field."""

    seed: int = Field(
        default_factory=_random_seed, ge=0, le=MAX_SEED, description="Noise seed"
    )
    noise_scale: float = Field(
        default=100.0, gt=0, description="Feature size in tiles (clamped on use)"
    )
    octaves: int = Field(default=4, ge=0, description="Number of octaves")
    lacunarity: float = Field(default=2.5, description="Frequency multiplier per octave")
    persistence: float = Field(default=0.5, description="Amplitude multiplier per octave")
    offset: tuple[float, float] = Field(
        default_factory=_random_offset,
        description="Sample offset added after frequency scaling",
    )


class TemperatureConfig(BaseModel, frozen=True):
    """Temperature field parameters: latitude band plus noise."""

    noise: NoiseConfig = Field(
        default_factory=lambda: NoiseConfig(
            noise_scale=200.0, octaves=3, lacunarity=4.0, persistence=0.3
        )
    )
    scale_lat_factor: float = Field(
        default=40.0, description="Weight of the cos(latitude) term"
    )
    noise_factor: float = Field(default=20.0, description="Weight of the noise term")


class ShapeConfig(BaseModel, frozen=True):
    """World-shape mask parameters."""

    kind: ShapeKind = Field(default=ShapeKind.CONTINENTS, description="Mask generator")
    shape_factor: float = Field(
        default=1.1, description="Strength of the mask subtracted from elevation"
    )
    shape_radius: float = Field(
        default=200.0, gt=0, description="Continent radius in tiles"
    )
    continent_count: int = Field(default=2, ge=1, description="Number of continents")


class BiomeTileRange(BaseModel, frozen=True):
    """Contiguous block of tile-atlas indices reserved for one biome."""

    start_index: int = Field(ge=0)
    length: int = Field(ge=1)

    @property
    def end_index(self) -> int:
        """Last index in the range (inclusive)."""
        return self.start_index + self.length - 1


def _freeze_table(
    table: Mapping[str, BiomeTileRange],
) -> Mapping[str, BiomeTileRange]:
    return MappingProxyType(dict(table))


# Read-only biome table; replacing it is the only way to change it
BiomeTable = Annotated[
    Mapping[str, BiomeTileRange],
    AfterValidator(_freeze_table),
    WrapSerializer(lambda table, handler: handler(dict(table))),
]


class Settings(BaseModel):
    """Complete generation settings.

    Mutable: the inspector assigns fields (or calls ``update``) and every
    accepted change bumps ``version``. Nested configs are frozen, so a change
    to one of them always goes through an assignment on this object. The biome
    table is a read-only mapping for the same reason.

    Raises:
        ConfigurationError: On an assignment that fails validation.
    """

    model_config = ConfigDict(validate_assignment=True)

    width: int = Field(default=400, gt=0, description="Grid width in tiles")
    height: int = Field(default=400, gt=0, description="Grid height in tiles")

    mode: MapMode = Field(default=MapMode.WORLD_SHAPE, description="Display mode")
    shape: ShapeConfig = Field(default_factory=ShapeConfig)
    shaped_world: bool = Field(
        default=True, description="Subtract the shape mask from elevation"
    )

    elevation: NoiseConfig = Field(default_factory=NoiseConfig)
    temperature: TemperatureConfig = Field(default_factory=TemperatureConfig)
    sea_level: float = Field(default=0.05, description="Land/water threshold")

    biomes: BiomeTable = Field(default_factory=dict, validate_default=True)

    _version: int = PrivateAttr(default=0)

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value for {name}: {e}") from e
        if name in type(self).model_fields:
            self._version += 1

    @property
    def version(self) -> int:
        """Number of accepted mutations since construction."""
        return self._version

    def update(self, **changes: Any) -> "Settings":
        """Apply several changes at once, merging nested dicts.

        Counts as a single mutation.

        Raises:
            ConfigurationError: If a key is unknown or the result is invalid.
        """
        fields = type(self).model_fields
        data = self.model_dump()
        for key, value in changes.items():
            if key not in fields:
                raise ConfigurationError(f"Unknown setting: {key}")
            if key != "biomes" and isinstance(value, dict):
                data[key] = _merge(data[key], value)
            else:
                data[key] = value

        try:
            validated = type(self).model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

        for key in changes:
            super().__setattr__(key, getattr(validated, key))
        self._version += 1
        return self

    def biome(self, name: str) -> BiomeTileRange:
        """Look up a biome tile range by name.

        Raises:
            BiomeNotFoundError: If the biome is not in the table.
        """
        try:
            return self.biomes[name]
        except KeyError:
            raise BiomeNotFoundError(name, list(self.biomes)) from None


def _merge(base: dict, changes: dict) -> dict:
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path: Path) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Validated Settings.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        ConfigurationError: If the values fail validation.
    """
    with open(path, "rb") as f:
        data = tomllib.load(f)
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings in {path}: {e}") from e


def find_settings(name: str) -> Path:
    """Find a settings file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. configs/{name}.toml

    Raises:
        FileNotFoundError: If no file is found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Settings file not found: {name}")

    config_path = _configs_dir() / f"{name}.toml"
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Settings '{name}' not found in {_configs_dir()}. "
        f"Available: {list_settings()}"
    )


def list_settings() -> list[str]:
    """List available settings names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"
