"""
Tests for head shape and data file loading.
"""

import os
import sys
import tempfile
import unittest
from pathlib import Path

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from head_viewer.core.data import HeadDataError, load_head_data, load_shape, load_values


class FileTestCase(unittest.TestCase):
    """Provides a temporary directory and a helper to write text files."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name, text):
        path = self.tmp / name
        path.write_text(text, encoding="utf-8")
        return path


class TestLoadShape(FileTestCase):

    def test_reads_one_vertex_per_line(self):
        path = self.write("shape.csv", "0,0,0\n1,1,1\n0.5,-2,3e-1\n")
        vertices = load_shape(path)
        self.assertEqual(vertices.shape, (3, 3))
        np.testing.assert_allclose(vertices[2], [0.5, -2.0, 0.3])

    def test_wrong_field_count_fails(self):
        path = self.write("shape.csv", "0,0,0\n1,1\n")
        with self.assertRaises(HeadDataError) as ctx:
            load_shape(path)
        self.assertIn(":2:", str(ctx.exception))

    def test_non_numeric_field_fails(self):
        path = self.write("shape.csv", "0,0,0\n1,x,1\n")
        with self.assertRaises(HeadDataError) as ctx:
            load_shape(path)
        self.assertIn(":2:", str(ctx.exception))

    def test_non_finite_coordinates_fail(self):
        for bad in ("nan", "inf", "-inf"):
            path = self.write("shape.csv", f"0,0,0\n1,{bad},1\n")
            with self.assertRaises(HeadDataError) as ctx:
                load_shape(path)
            self.assertIn(":2: non-finite value", str(ctx.exception))

    def test_empty_file_fails(self):
        path = self.write("shape.csv", "")
        with self.assertRaises(HeadDataError):
            load_shape(path)

    def test_missing_file_raises_file_not_found(self):
        with self.assertRaises(FileNotFoundError):
            load_shape(self.tmp / "missing.csv")


class TestLoadValues(FileTestCase):

    def test_trailing_field_is_dropped(self):
        path = self.write("data.csv", "1,3,\n2,4,\n")
        values = load_values(path, 2)
        np.testing.assert_array_equal(values, [[1.0, 3.0], [2.0, 4.0]])

    def test_series_length_is_column_count_minus_one(self):
        path = self.write("data.csv", "1,2,3,4,\n5,6,7,8,\n9,10,11,12,\n")
        values = load_values(path, 3)
        self.assertEqual(values.shape, (3, 4))

    def test_non_empty_trailing_field_is_dropped_with_warning(self):
        path = self.write("data.csv", "1,3,5\n2,4,\n")
        with self.assertLogs("head_viewer.core.data", level="WARNING") as logs:
            values = load_values(path, 2)
        np.testing.assert_array_equal(values, [[1.0, 3.0], [2.0, 4.0]])
        self.assertIn("1 of 2 lines", logs.output[0])

    def test_line_count_mismatch_fails(self):
        path = self.write("data.csv", "1,3,\n2,4,\n")
        with self.assertRaises(HeadDataError):
            load_values(path, 3)

    def test_more_lines_than_points_fails(self):
        path = self.write("data.csv", "1,3,\n2,4,\n5,6,\n")
        with self.assertRaises(HeadDataError):
            load_values(path, 2)

    def test_non_finite_values_fail(self):
        for bad in ("nan", "inf", "-inf"):
            path = self.write("data.csv", f"1,3,\n{bad},4,\n")
            with self.assertRaises(HeadDataError) as ctx:
                load_values(path, 2)
            self.assertIn(":2: non-finite value", str(ctx.exception))

    def test_single_field_line_fails(self):
        path = self.write("data.csv", "1,3,\n2\n")
        with self.assertRaises(HeadDataError):
            load_values(path, 2)

    def test_ragged_rows_fail(self):
        path = self.write("data.csv", "1,3,\n2,4,6,\n")
        with self.assertRaises(HeadDataError) as ctx:
            load_values(path, 2)
        self.assertIn(":2:", str(ctx.exception))

    def test_non_numeric_value_fails(self):
        path = self.write("data.csv", "1,3,\n2,abc,\n")
        with self.assertRaises(HeadDataError):
            load_values(path, 2)


class TestLoadHeadData(FileTestCase):

    def test_loads_matching_files(self):
        shape = self.write("shape.csv", "0,0,0\n1,1,1\n")
        data = self.write("data.csv", "1,3,\n2,4,\n")
        head_data = load_head_data(shape, data)
        self.assertEqual(head_data.n_points, 2)
        self.assertEqual(head_data.n_times, 2)

    def test_mismatch_aborts_whole_load(self):
        shape = self.write("shape.csv", "0,0,0\n1,1,1\n2,2,2\n")
        data = self.write("data.csv", "1,3,\n2,4,\n")
        with self.assertRaises(HeadDataError):
            load_head_data(shape, data)

    def test_extra_data_lines_abort_whole_load(self):
        shape = self.write("shape.csv", "0,0,0\n1,1,1\n")
        data = self.write("data.csv", "1,3,\n2,4,\n5,6,\n")
        with self.assertRaises(HeadDataError):
            load_head_data(shape, data)

    def test_missing_data_file_fails(self):
        shape = self.write("shape.csv", "0,0,0\n")
        with self.assertRaises(FileNotFoundError):
            load_head_data(shape, self.tmp / "missing.csv")


if __name__ == "__main__":
    unittest.main(verbosity=2)
