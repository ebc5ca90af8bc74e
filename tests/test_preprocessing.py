"""Tests for preprocessing module."""

import pytest
import numpy as np
from circletransform.preprocessing.field_selector import FieldSelector, select_field
from circletransform.preprocessing.noise import NoiseEstimator, estimate_noise


class TestFieldSelector:
    """Test interlaced field selection."""
    
    def test_no_field_returns_input(self):
        """Test that the image is passed through unchanged."""
        image = np.arange(20).reshape(5, 4)
        assert select_field(image) is image
        assert not FieldSelector().active
    
    def test_even_field(self):
        """Test selecting even rows."""
        image = np.arange(20).reshape(5, 4)
        field = select_field(image, 0)
        assert field.shape == (3, 4)
        assert field.dtype == np.float64
        np.testing.assert_array_equal(field, image[[0, 2, 4]])
    
    def test_odd_field(self):
        """Test selecting odd rows."""
        image = np.arange(20).reshape(5, 4)
        field = select_field(image, 1)
        assert field.shape == (2, 4)
        np.testing.assert_array_equal(field, image[[1, 3]])
    
    def test_parity_is_value_mod_two(self):
        """Test that any integer selects by its parity."""
        image = np.arange(24).reshape(6, 4)
        np.testing.assert_array_equal(select_field(image, 3), select_field(image, 1))
        np.testing.assert_array_equal(select_field(image, 4), select_field(image, 0))
        np.testing.assert_array_equal(select_field(image, -1), select_field(image, 1))
    
    def test_to_frame_rows(self):
        """Test mapping field rows back to frame rows."""
        rows = np.array([0, 1, 2])
        np.testing.assert_array_equal(FieldSelector(0).to_frame_rows(rows), [0, 2, 4])
        np.testing.assert_array_equal(FieldSelector(1).to_frame_rows(rows), [1, 3, 5])
        np.testing.assert_array_equal(FieldSelector().to_frame_rows(rows), rows)


class TestNoiseEstimator:
    """Test robust noise estimation."""
    
    def test_constant_image(self):
        """Test that a flat image has no noise."""
        assert estimate_noise(np.full((32, 32), 7.0)) == 0.0
    
    def test_gaussian_noise(self):
        """Test the estimate matches the noise standard deviation."""
        rng = np.random.default_rng(1)
        image = 50.0 + rng.normal(0.0, 2.0, (200, 200))
        assert estimate_noise(image) == pytest.approx(2.0, rel=0.05)
    
    def test_robust_to_features(self):
        """Test a few bright features barely move the estimate."""
        rng = np.random.default_rng(2)
        image = rng.normal(0.0, 2.0, (200, 200))
        image[50:60, 50:60] += 500.0
        assert estimate_noise(image) == pytest.approx(2.0, rel=0.1)
    
    def test_nan_pixels_ignored(self):
        """Test that NaN pixels are left out."""
        rng = np.random.default_rng(3)
        image = rng.normal(0.0, 1.0, (100, 100))
        image[0, :10] = np.nan
        assert np.isfinite(NoiseEstimator().estimate(image))
    
    def test_integer_image(self):
        """Test integer input is accepted."""
        image = np.random.default_rng(4).integers(0, 255, (64, 64), dtype=np.uint8)
        assert estimate_noise(image) > 0
