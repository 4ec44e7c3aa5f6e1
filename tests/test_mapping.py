"""
Tests for value range computation and value-to-color/scale mapping.
"""

import os
import sys
import unittest

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from head_viewer.core.mapping import (
    ValueRange,
    compute_value_range,
    map_value,
    map_values,
    percentage,
)


class TestComputeValueRange(unittest.TestCase):

    def test_global_bounds(self):
        values = np.array([[1.0, 3.0], [2.0, 4.0]])
        value_range = compute_value_range(values)
        self.assertEqual(value_range, ValueRange(1.0, 4.0))

    def test_bounds_contain_and_attain_every_value(self):
        rng = np.random.default_rng(0)
        values = rng.normal(size=(50, 20))
        value_range = compute_value_range(values)
        self.assertTrue(np.all(values >= value_range.min))
        self.assertTrue(np.all(values <= value_range.max))
        self.assertTrue(np.any(values == value_range.min))
        self.assertTrue(np.any(values == value_range.max))

    def test_empty_values_fail(self):
        with self.assertRaises(ValueError):
            compute_value_range(np.zeros((0, 3)))


class TestMapValue(unittest.TestCase):

    def setUp(self):
        self.value_range = ValueRange(1.0, 4.0)

    def test_minimum_is_red(self):
        color, scale = map_value(1.0, self.value_range)
        self.assertEqual(color, (255, 0, 0, 255))
        self.assertAlmostEqual(scale, 0.08)

    def test_maximum_is_green(self):
        color, scale = map_value(4.0, self.value_range)
        self.assertEqual(color, (0, 255, 0, 255))
        self.assertAlmostEqual(scale, 0.12)

    def test_intermediate_values_interpolate(self):
        color, _ = map_value(2.0, self.value_range)
        self.assertEqual(color, (170, 85, 0, 255))
        color, _ = map_value(3.0, self.value_range)
        self.assertEqual(color, (85, 170, 0, 255))

    def test_scale_saturates_outside_narrow_band(self):
        # scale = p - 0.4 clamped to [0.08, 0.12]
        value_range = ValueRange(0.0, 1.0)
        self.assertAlmostEqual(map_value(0.3, value_range)[1], 0.08)
        self.assertAlmostEqual(map_value(0.49, value_range)[1], 0.09)
        self.assertAlmostEqual(map_value(0.5, value_range)[1], 0.10)
        self.assertAlmostEqual(map_value(0.51, value_range)[1], 0.11)
        self.assertAlmostEqual(map_value(0.7, value_range)[1], 0.12)

    def test_mapping_is_pure(self):
        first = map_value(2.5, self.value_range)
        second = map_value(2.5, self.value_range)
        self.assertEqual(first, second)

    def test_returns_python_types(self):
        color, scale = map_value(2.5, self.value_range)
        self.assertTrue(all(type(c) is int for c in color))
        self.assertIs(type(scale), float)

    def test_degenerate_range_maps_to_minimum(self):
        value_range = ValueRange(2.0, 2.0)
        np.testing.assert_array_equal(percentage([2.0, 2.0], value_range), [0.0, 0.0])
        color, scale = map_value(2.0, value_range)
        self.assertEqual(color, (255, 0, 0, 255))
        self.assertAlmostEqual(scale, 0.08)


class TestMapValues(unittest.TestCase):

    def test_vectorized_matches_scalar(self):
        value_range = ValueRange(-1.0, 1.0)
        values = np.linspace(-1.0, 1.0, 21)
        colors, scales = map_values(values, value_range)
        self.assertEqual(colors.shape, (21, 4))
        self.assertEqual(colors.dtype, np.uint8)
        for value, color, scale in zip(values, colors, scales):
            expected_color, expected_scale = map_value(value, value_range)
            self.assertEqual(tuple(int(c) for c in color), expected_color)
            self.assertAlmostEqual(float(scale), expected_scale)

    def test_values_outside_range_are_clamped(self):
        value_range = ValueRange(0.0, 1.0)
        colors, scales = map_values([-5.0, 7.0], value_range)
        self.assertEqual(tuple(int(c) for c in colors[0]), (255, 0, 0, 255))
        self.assertEqual(tuple(int(c) for c in colors[1]), (0, 255, 0, 255))
        np.testing.assert_allclose(scales, [0.08, 0.12])

    def test_red_and_green_sum_to_255(self):
        value_range = ValueRange(0.0, 10.0)
        colors, _ = map_values(np.arange(11.0), value_range)
        np.testing.assert_array_equal(colors[:, 0].astype(int) + colors[:, 1], 255)
        np.testing.assert_array_equal(colors[:, 2], 0)
        np.testing.assert_array_equal(colors[:, 3], 255)


if __name__ == "__main__":
    unittest.main(verbosity=2)
