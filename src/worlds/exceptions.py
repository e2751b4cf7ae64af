"""Custom exceptions for world generation."""


class WorldsError(Exception):
    """Base exception for world generation errors."""

    pass


class ConfigurationError(WorldsError):
    """Raised when settings are malformed or inconsistent."""

    pass


class BiomeNotFoundError(ConfigurationError, KeyError):
    """Raised when a biome name is missing from the tile-range table."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = sorted(available or [])
        super().__init__(
            f"Biome '{name}' not found in tile-range table "
            f"(available: {self.available})"
        )

    def __str__(self) -> str:
        return self.args[0]


class OutOfBoundsError(WorldsError, IndexError):
    """Raised when a grid coordinate lies outside the tile matrix."""

    pass


class ShapeGeneratorError(WorldsError):
    """Raised when a shape generator is used before init or cannot init."""

    pass


class GenerationError(WorldsError):
    """Raised when a regeneration pass fails."""

    pass
