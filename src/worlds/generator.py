"""Regeneration passes and the map controller that triggers them."""

import logging
import time

import numpy as np
import structlog
from numpy.typing import NDArray

from .classification import TileClassifier
from .exceptions import GenerationError, WorldsError
from .fields import make_field_generators
from .matrix import TILE_FIELDS, TileMatrix
from .settings import Settings
from .shapes import ShapeGenerator, create_shape_generator

logger = logging.getLogger(__name__)
event_logger = structlog.get_logger()

# Offset step per drift tick, along x
TEMPERATURE_DRIFT = 0.05


class GenerationResult:
    """Result of one full regeneration pass."""

    def __init__(
        self,
        matrix: TileMatrix,
        indices: NDArray[np.uint32],
        settings_version: int,
        duration_ms: float = 0.0,
    ):
        self.matrix = matrix
        self.indices = indices
        self.settings_version = settings_version
        self.duration_ms = duration_ms


def generate_tiles(settings: Settings, shape_generator: ShapeGenerator) -> TileMatrix:
    """Compute every cell's field values.

    Args:
        settings: Generation settings.
        shape_generator: Initialized shape generator for these settings.

    Returns:
        A freshly filled TileMatrix.

    Raises:
        ShapeGeneratorError: If the shape generator was never initialized.
        GenerationError: If a field produced non-finite values.
    """
    width, height = settings.width, settings.height
    logger.info(f"Generating {width}x{height} tiles")

    matrix = TileMatrix(width, height)
    for generator in make_field_generators(shape_generator):
        generator.apply_grid(matrix, settings)

    for name in TILE_FIELDS:
        if not np.all(np.isfinite(matrix.field(name))):
            raise GenerationError(f"Field '{name}' contains non-finite values")

    _log_field_stats(matrix, settings)
    return matrix


def classify_tiles(matrix: TileMatrix, settings: Settings) -> NDArray[np.uint32]:
    """Tile indices for every cell under the settings' current mode.

    Raises:
        BiomeNotFoundError: If the mode's biome is missing from the table.
    """
    return TileClassifier(settings).classify_matrix(matrix)


def generate_map(
    settings: Settings,
    shape_generator: ShapeGenerator | None = None,
) -> GenerationResult:
    """Run a full regeneration pass: fields, then classification.

    The biome lookup happens before any cell is generated, so a
    configuration mismatch fails fast.

    Args:
        settings: Generation settings.
        shape_generator: Initialized shape generator; created from settings
            if omitted.

    Returns:
        GenerationResult with the tile matrix and tile indices.
    """
    start_time = time.perf_counter()
    version = settings.version

    classifier = TileClassifier(settings)
    if shape_generator is None:
        shape_generator = create_shape_generator(settings)

    matrix = generate_tiles(settings, shape_generator)
    indices = classifier.classify_matrix(matrix)

    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.info(f"Generation complete in {duration_ms:.0f} ms")

    return GenerationResult(
        matrix=matrix,
        indices=indices,
        settings_version=version,
        duration_ms=duration_ms,
    )


def land_mask(matrix: TileMatrix, sea_level: float) -> NDArray[np.bool_]:
    """Boolean mask where elevation is at or above sea level."""
    return matrix.field("elevation") >= sea_level


def _log_field_stats(matrix: TileMatrix, settings: Settings) -> None:
    """Log field ranges and land fraction."""
    for name in TILE_FIELDS:
        values = matrix.field(name)
        logger.debug(
            f"  {name}: min={values.min():.3f} max={values.max():.3f} "
            f"mean={values.mean():.3f}"
        )

    land = land_mask(matrix, settings.sea_level)
    logger.info(
        f"Sea level: {settings.sea_level:.3f}, land fraction: {np.mean(land):.2%}"
    )


class WorldMap:
    """Owns the settings, the active shape generator, and the last valid map.

    The inspector mutates ``settings``; ``tick`` compares the settings
    version against the last generated one and runs a full regeneration
    pass when they differ. A failed pass keeps the previous map.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.shape_generator: ShapeGenerator | None = None
        self.result: GenerationResult | None = None
        self._generated_version: int | None = None

    @property
    def matrix(self) -> TileMatrix | None:
        return self.result.matrix if self.result else None

    @property
    def indices(self) -> NDArray[np.uint32] | None:
        return self.result.indices if self.result else None

    @property
    def dirty(self) -> bool:
        """Whether settings changed since the last pass."""
        return self.settings.version != self._generated_version

    def tick(self) -> bool:
        """Regenerate if settings changed.

        Returns:
            True if a regeneration pass ran.
        """
        if not self.dirty:
            return False
        self.regenerate()
        return True

    def drift_temperature(self, dx: float = TEMPERATURE_DRIFT, dy: float = 0.0) -> None:
        """Shift the temperature noise offset, moving weather across the map.

        Meant to be called on a repeating timer; the next ``tick`` picks the
        change up like any other settings edit.
        """
        offset_x, offset_y = self.settings.temperature.noise.offset
        self.settings.update(
            temperature={"noise": {"offset": (offset_x + dx, offset_y + dy)}}
        )

    def regenerate(self) -> GenerationResult:
        """Replace the shape generator and run a full pass.

        Raises:
            WorldsError: If the pass fails; the previous map is kept.
        """
        version = self.settings.version
        self._generated_version = version
        event_logger.info(
            "regeneration_started",
            version=version,
            width=self.settings.width,
            height=self.settings.height,
            mode=self.settings.mode.value,
        )

        try:
            shape_generator = create_shape_generator(self.settings)
            result = generate_map(self.settings, shape_generator)
        except WorldsError as e:
            event_logger.error("regeneration_failed", version=version, error=str(e))
            raise

        self.shape_generator = shape_generator
        event_logger.debug("shape_generator_replaced", kind=shape_generator.kind.value)
        self.result = result

        event_logger.info(
            "regeneration_finished",
            version=version,
            duration_ms=round(result.duration_ms, 1),
        )
        return result
