"""Tests for the deterministic noise fields."""

import numpy as np
import pytest

from brushwork.generation.noise import (
    FractalField,
    GradientField,
    GradientNoise,
    NoiseField,
    spread,
)


class TestDeterminism:
    """Same seed, same values; different seed, different values."""

    def test_same_seed_same_values(self):
        xs = np.arange(-200, 200)
        a = FractalField(7).get(xs, 0.0)
        b = FractalField(7).get(xs, 0.0)
        assert np.array_equal(a, b)

    def test_different_seeds_differ(self):
        xs = np.arange(0, 100)
        assert not np.array_equal(GradientField(1, 0.173).get(xs, 0.0), GradientField(2, 0.173).get(xs, 0.0))

    def test_scalar_matches_array(self):
        field = FractalField(3)
        values = field.get(np.arange(10), 1.0)
        for x in range(10):
            assert field.get(x, 1.0) == pytest.approx(values[x])


class TestRange:
    """Every field stays in [0, 1)."""

    @pytest.mark.parametrize("seed", [0, 1, 42, 2**31])
    def test_fractal_in_unit_interval(self, seed):
        xs, ys = np.meshgrid(np.arange(-500, 500, 7), np.arange(-20, 20))
        values = FractalField(seed).get(xs, ys)
        assert values.shape == xs.shape
        assert values.min() >= 0.0
        assert values.max() < 1.0

    def test_gradient_in_unit_interval(self):
        xs = np.linspace(-1000, 1000, 5001)
        values = GradientField(9, 0.31).get(xs, 3.0)
        assert values.min() >= 0.0
        assert values.max() < 1.0

    def test_scalar_returns_float(self):
        value = GradientField(0).get(3, 4)
        assert isinstance(value, float)
        assert 0.0 <= value < 1.0


class TestShape:
    """Noise is smooth but not flat."""

    def test_integer_samples_vary(self):
        values = GradientField(5, 1.0).get(np.arange(50), 0.0)
        assert len(np.unique(values)) > 10

    def test_neighbors_are_close_at_low_frequency(self):
        values = GradientNoise(11, 1 / 64).sample(np.arange(200), 0.0)
        assert np.abs(np.diff(values)).max() < 0.1

    def test_fields_satisfy_protocol(self):
        assert isinstance(GradientField(0), NoiseField)
        assert isinstance(FractalField(0), NoiseField)


class TestSpread:
    """Tests for spreading clustered samples."""

    def test_fractional_part(self):
        assert spread(0.53) == pytest.approx(0.3)
        assert spread(0.537, 100) == pytest.approx(0.7)

    def test_stays_in_unit_interval(self):
        for i in range(1000):
            assert 0.0 <= spread(i / 1000) < 1.0
