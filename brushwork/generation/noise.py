"""
Deterministic noise fields.

Gradient (Perlin) noise over a permutation table shuffled from the seed,
evaluated with numpy so that scalars and coordinate arrays share one code
path. Every field is a pure function of (seed, coordinates): the table and
a sub-lattice offset are drawn once from numpy's seeded generator and
never change, so the same seed yields the same values in every process.

All fields return values in [0, 1).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike

# Axis-aligned gradient set
_GRADIENT_VECTORS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]])

# Approximate half-range of a single octave with the gradient set above
_OCTAVE_RANGE = 0.5

# Largest float below 1.0, so floor(n * k) < k for every k
_UNIT_MAX = float(np.nextafter(1.0, 0.0))


@runtime_checkable
class NoiseField(Protocol):
    """A scalar field over level coordinates with values in [0, 1)."""

    def get(self, x: ArrayLike, y: ArrayLike) -> float | np.ndarray:
        ...


def _lerp(a, b, t):
    return a + t * (b - a)


def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


def _gradient(h, x, y):
    """Dot product between the hashed gradient vector and the offset."""
    g = _GRADIENT_VECTORS[h % 4]
    return g[..., 0] * x + g[..., 1] * y


def _to_unit(values: np.ndarray) -> float | np.ndarray:
    result = np.clip(values, 0.0, _UNIT_MAX)
    if np.ndim(result) == 0:
        return float(result)
    return result


class GradientNoise:
    """One octave of 2D gradient noise.

    Raw output lies roughly in [-0.5, 0.5]; use GradientField or
    FractalField for normalized values.
    """

    def __init__(self, seed: int, frequency: float = 1.0):
        """Build the permutation table for a seed.

        Args:
            seed: Non-negative seed
            frequency: Cycles per unit of input coordinate
        """
        rng = np.random.default_rng(seed)
        perm = rng.permutation(256)
        self._perm = np.concatenate([perm, perm])
        # Keeps integer sample points off the lattice, where noise is zero
        self._offset = rng.random(2)
        self.seed = seed
        self.frequency = frequency

    def sample(self, x: ArrayLike, y: ArrayLike) -> np.ndarray:
        xs = np.asarray(x, dtype=np.float64) * self.frequency + self._offset[0]
        ys = np.asarray(y, dtype=np.float64) * self.frequency + self._offset[1]

        xi = np.floor(xs).astype(np.int64)
        yi = np.floor(ys).astype(np.int64)
        xf = xs - xi
        yf = ys - yi
        u = _fade(xf)
        v = _fade(yf)

        px0 = xi % 256
        px1 = (px0 + 1) % 256
        py0 = yi % 256
        py1 = (py0 + 1) % 256

        p = self._perm
        g00 = _gradient(p[p[px0] + py0], xf, yf)
        g01 = _gradient(p[p[px0] + py1], xf, yf - 1)
        g10 = _gradient(p[p[px1] + py0], xf - 1, yf)
        g11 = _gradient(p[p[px1] + py1], xf - 1, yf - 1)

        return _lerp(_lerp(g00, g10, u), _lerp(g01, g11, u), v)


class GradientField:
    """Single-octave field normalized to [0, 1)."""

    def __init__(self, seed: int, frequency: float = 1.0):
        self._noise = GradientNoise(seed, frequency)

    def get(self, x: ArrayLike, y: ArrayLike) -> float | np.ndarray:
        return _to_unit(0.5 + self._noise.sample(x, y) / (2 * _OCTAVE_RANGE))


class FractalField:
    """Multi-octave (fBm) field normalized to [0, 1).

    Octave k samples noise seeded with seed + k at frequency
    frequency * lacunarity**k, weighted by persistence**k. The sum is
    divided by the total weight so the output range does not depend on
    the octave count.
    """

    def __init__(
        self,
        seed: int,
        octaves: int = 4,
        frequency: float = 1 / 32,
        lacunarity: float = 2.0,
        persistence: float = 0.2,
    ):
        assert octaves >= 1
        self._octaves = [
            GradientNoise(seed + k, frequency * lacunarity**k) for k in range(octaves)
        ]
        self._weights = [persistence**k for k in range(octaves)]
        self._scale = 1.0 / (2 * _OCTAVE_RANGE * sum(self._weights))

    def get(self, x: ArrayLike, y: ArrayLike) -> float | np.ndarray:
        total = sum(w * octave.sample(x, y) for w, octave in zip(self._weights, self._octaves))
        return _to_unit(0.5 + total * self._scale)


def spread(n: float, factor: int = 10) -> float:
    """Stretch a clustered noise sample into an evenly spread one.

    Noise values bunch around 0.5; the fractional part of n * factor is
    close to uniform over [0, 1).
    """
    return (n * factor) % 1.0
