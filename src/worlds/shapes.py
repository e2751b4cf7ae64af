"""World-shape mask generators.

A shape generator produces a per-cell mask in [-1, 1]: low values where land
should form, high values towards the ocean. ``init`` derives any
seed-dependent state from the settings and must run before ``generate``;
after a settings change the owner replaces the generator and calls ``init``
again.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .exceptions import ShapeGeneratorError
from .scaling import scale
from .settings import Settings, ShapeKind

logger = logging.getLogger(__name__)


def _cell_grid(settings: Settings) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Column and row coordinates broadcastable to (height, width)."""
    xs = np.arange(settings.width, dtype=np.float64)[np.newaxis, :]
    ys = np.arange(settings.height, dtype=np.float64)[:, np.newaxis]
    return xs, ys


class ShapeGenerator:
    """Base class for the closed family of shape generators."""

    kind: ShapeKind

    def __init__(self) -> None:
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self, settings: Settings) -> None:
        """Derive generator state from settings.

        Raises:
            ShapeGeneratorError: If the grid has a zero dimension.
        """
        if settings.width <= 0 or settings.height <= 0:
            raise ShapeGeneratorError(
                f"Cannot init {self.kind.value} shape on a "
                f"{settings.width}x{settings.height} grid"
            )
        self._init(settings)
        self._initialized = True

    def generate(self, x: int, y: int, settings: Settings) -> float:
        """Mask value in [-1, 1] for cell (x, y).

        Raises:
            ShapeGeneratorError: If called before init.
        """
        self._check_initialized()
        return float(self._mask(np.float64(x), np.float64(y), settings))

    def generate_grid(self, settings: Settings) -> NDArray[np.float64]:
        """Mask for every cell, shape (height, width).

        Raises:
            ShapeGeneratorError: If called before init.
        """
        self._check_initialized()
        xs, ys = _cell_grid(settings)
        return np.broadcast_to(
            self._mask(xs, ys, settings), (settings.height, settings.width)
        ).copy()

    def _check_initialized(self) -> None:
        if not self._initialized:
            raise ShapeGeneratorError(
                f"{self.kind.value} shape generator used before init"
            )

    def _init(self, settings: Settings) -> None:
        pass

    def _mask(self, x, y, settings: Settings):
        """Mask at x, y; scalars or broadcastable arrays."""
        raise NotImplementedError


class CenteredCircleShape(ShapeGenerator):
    """Radial mask: -1 at the grid center, +1 at the distance of (0, 0).

    The center is (width / 2, height / 2), so of the four grid corners only
    (0, 0) reaches +1 exactly; (width - 1, height - 1) lies one cell closer
    to the center and reads slightly less.
    """

    kind = ShapeKind.CENTERED_CIRCLE

    def _mask(self, x, y, settings: Settings):
        center_x = settings.width / 2
        center_y = settings.height / 2

        distance = np.hypot(x - center_x, y - center_y)
        distance_max = np.hypot(center_x, center_y)

        return scale(distance, 0.0, distance_max, -1.0, 1.0)


class ContinentsShape(ShapeGenerator):
    """Distance to the nearest of several random continent anchors."""

    kind = ShapeKind.CONTINENTS

    def __init__(self) -> None:
        super().__init__()
        self.anchors: list[tuple[float, float]] = []

    def _init(self, settings: Settings) -> None:
        # Seeded from the elevation seed
        rng = np.random.default_rng(settings.elevation.seed)
        count = settings.shape.continent_count

        xs = rng.uniform(0.0, settings.width, size=count)
        ys = rng.uniform(0.0, settings.height, size=count)
        self.anchors = [(float(x), float(y)) for x, y in zip(xs, ys)]

        logger.debug(f"Continent anchors: {self.anchors}")

    def _mask(self, x, y, settings: Settings):
        distance = np.hypot(x - self.anchors[0][0], y - self.anchors[0][1])
        for anchor_x, anchor_y in self.anchors[1:]:
            distance = np.minimum(distance, np.hypot(x - anchor_x, y - anchor_y))

        value = scale(distance, 0.0, settings.shape.shape_radius, -1.0, 1.0)
        return np.clip(value, -1.0, 1.0)


_SHAPE_GENERATORS: dict[ShapeKind, type[ShapeGenerator]] = {
    ShapeKind.CENTERED_CIRCLE: CenteredCircleShape,
    ShapeKind.CONTINENTS: ContinentsShape,
}


def make_shape_generator(kind: ShapeKind) -> ShapeGenerator:
    """Create a fresh, uninitialized generator for kind."""
    return _SHAPE_GENERATORS[kind]()


def create_shape_generator(settings: Settings) -> ShapeGenerator:
    """Create the generator selected by settings and init it."""
    generator = make_shape_generator(settings.shape.kind)
    generator.init(settings)
    return generator
