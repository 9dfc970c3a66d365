"""
Tests for configuration objects.
"""

import math
import os
import unittest
from unittest import mock

from grid_planner.config_manager import GridPlannerConfig, SweepConfig
from grid_planner.exceptions import ConfigurationError


class TestGridPlannerConfig(unittest.TestCase):
    """Test planner radius policy validation."""

    def test_defaults(self):
        """Test defaults match the module constants."""
        config = GridPlannerConfig()
        self.assertEqual(config.max_radius, 5000)
        self.assertEqual(config.optimal_radius, 1000)
        self.assertEqual(config.min_radius, 500)
        self.assertEqual(config.overlap_fraction, 0.2)
        self.assertEqual(config.effective_radius, 800)

    def test_rejects_non_positive_radius(self):
        """Test zero, negative and NaN radii are rejected."""
        for value in (0, -1, math.nan):
            with self.assertRaises(ConfigurationError):
                GridPlannerConfig(min_radius=value)

    def test_rejects_min_above_optimal(self):
        """Test min_radius must not exceed optimal_radius."""
        with self.assertRaises(ConfigurationError):
            GridPlannerConfig(min_radius=1500)

    def test_rejects_optimal_above_max(self):
        """Test optimal_radius must not exceed max_radius."""
        with self.assertRaises(ConfigurationError):
            GridPlannerConfig(optimal_radius=6000)

    def test_rejects_bad_overlap(self):
        """Test overlap must be in [0, 1)."""
        for value in (-0.1, 1.0, 2.0):
            with self.assertRaises(ConfigurationError):
                GridPlannerConfig(overlap_fraction=value)

    def test_is_immutable(self):
        """Test the config cannot be mutated after construction."""
        config = GridPlannerConfig()
        with self.assertRaises(AttributeError):
            config.optimal_radius = 2000


class TestSweepConfig(unittest.TestCase):
    """Test sweep configuration resolution."""

    def test_api_key_from_env(self):
        """Test the API key falls back to GOOGLE_MAPS_API_KEY."""
        with mock.patch.dict(os.environ, {"GOOGLE_MAPS_API_KEY": "env-key"}):
            self.assertEqual(SweepConfig().api_key, "env-key")

    def test_explicit_api_key_wins(self):
        """Test an explicit key overrides the environment."""
        with mock.patch.dict(os.environ, {"GOOGLE_MAPS_API_KEY": "env-key"}):
            self.assertEqual(SweepConfig(api_key="explicit").api_key, "explicit")

    def test_missing_api_key(self):
        """Test require_api_key raises without a key."""
        with self.assertRaises(ConfigurationError):
            SweepConfig(api_key="").require_api_key()

    def test_workers_clamped(self):
        """Test workers are kept between 1 and the maximum."""
        self.assertEqual(SweepConfig(api_key="k", workers=0).workers, 1)
        self.assertEqual(SweepConfig(api_key="k", workers=1000).workers, 20)

    def test_page_retries(self):
        """Test follow-up page retries default to 3 and are never negative."""
        self.assertEqual(SweepConfig(api_key="k").max_retries, 3)
        self.assertEqual(SweepConfig(api_key="k", max_retries=-2).max_retries, 0)


if __name__ == "__main__":
    unittest.main()
