"""Fractal coherent-noise sampling.

Sums octaves of seeded 2D OpenSimplex noise at increasing frequency
(lacunarity) and decreasing amplitude (persistence). The sum is not
normalized: each field generator applies its own range policy afterwards.
"""

from functools import lru_cache

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

from .settings import NoiseConfig

# Upper bound applied to noise_scale on use
MAX_NOISE_SCALE = 100_000.0


@lru_cache(maxsize=16)
def _simplex(seed: int) -> OpenSimplex:
    return OpenSimplex(seed=seed)


def effective_scale(config: NoiseConfig) -> float:
    """Return noise_scale clamped into (0, MAX_NOISE_SCALE]."""
    return min(config.noise_scale, MAX_NOISE_SCALE)


class NoiseSampler:
    """Evaluates the fractal noise field described by a NoiseConfig."""

    def __init__(self, config: NoiseConfig):
        self.config = config
        self._noise = _simplex(config.seed)
        self._scale = effective_scale(config)

    def _octaves(self):
        for o in range(self.config.octaves):
            yield self.config.lacunarity**o, self.config.persistence**o

    def sample(self, x: float, y: float) -> float:
        """Sample the fractal field at grid coordinate (x, y).

        Returns 0.0 when octaves is 0.
        """
        offset_x, offset_y = self.config.offset
        value = 0.0
        for frequency, amplitude in self._octaves():
            sample_x = x / self._scale * frequency + offset_x
            sample_y = y / self._scale * frequency + offset_y
            value += self._noise.noise2(sample_x, sample_y) * amplitude
        return value

    def sample_grid(self, width: int, height: int) -> NDArray[np.float64]:
        """Sample every cell of a width x height grid at once.

        Same values as calling ``sample`` per cell, one ``noise2array`` call
        per octave.

        Returns:
            Array of shape (height, width).
        """
        offset_x, offset_y = self.config.offset
        xs = np.arange(width, dtype=np.float64)
        ys = np.arange(height, dtype=np.float64)

        value = np.zeros((height, width), dtype=np.float64)
        for frequency, amplitude in self._octaves():
            sample_x = xs / self._scale * frequency + offset_x
            sample_y = ys / self._scale * frequency + offset_y
            value += self._noise.noise2array(sample_x, sample_y) * amplitude
        return value


def fractal_noise(config: NoiseConfig, x: float, y: float) -> float:
    """Sample the fractal field for config at (x, y)."""
    return NoiseSampler(config).sample(x, y)
