"""
Tests for summation and JSON helpers, and the vector helpers in curve.geometry.
"""

import io
import json

import numpy
import numpy.testing as npt
import pytest

from splinepath import util
from splinepath.curve import geometry


class TestSummation:
    """Tests for compensated sums."""

    def test_cumsum(self):
        npt.assert_array_equal(util.compensated_cumsum([1, 2, 3]), [0, 1, 3, 6])
        npt.assert_array_equal(util.compensated_cumsum([1, 2], start=10), [10, 11, 13])
        npt.assert_array_equal(util.compensated_cumsum([]), [0])

    def test_compensation(self):
        values = [1.0] + [1e-16] * 1000
        assert util.compensated_cumsum(values)[-1] == pytest.approx(1 + 1e-13, abs=1e-15)
        assert util.compensated_sum(values) == pytest.approx(1 + 1e-13, abs=1e-15)


class TestJson:
    """Tests for encoding numpy data as JSON."""

    def test_numpy_values(self):
        data = dict(array=numpy.arange(3), scalar=numpy.float64(1.5), integer=numpy.int32(4))
        decoded = json.loads(util.json_encode_legible_to_str(data))
        assert decoded == dict(array=[0, 1, 2], scalar=1.5, integer=4)

    def test_file(self):
        f = io.StringIO()
        util.json_encode_legible_to_file(dict(a=numpy.zeros(2)), f)
        assert json.loads(f.getvalue()) == dict(a=[0, 0])

    def test_unencodable(self):
        with pytest.raises(TypeError):
            util.json_encode_legible_to_str(dict(a=object()))


class TestGeometry:
    """Tests for vector and polyline helpers."""

    def test_cross(self):
        assert geometry.cross([1, 0], [0, 1]) == 1
        npt.assert_array_equal(geometry.cross([1, 0, 0], [0, 1, 0]), [0, 0, 1])

    def test_find_perp(self):
        npt.assert_allclose(geometry.find_perp([2, 0]), [0, 1])
        npt.assert_allclose(geometry.find_perp([2, 0], unit=False), [0, 2])

    def test_cumulative_distances(self):
        points = [[0, 0], [3, 4], [3, 9]]
        npt.assert_allclose(geometry.cumulative_distances(points, unit=False), [0, 5, 10])
        npt.assert_allclose(geometry.cumulative_distances(points), [0, 0.5, 1])
        assert geometry.polyline_length(points) == 10

    def test_distances_to_line_segment(self):
        distances = geometry.distances_to_line_segment([[1, 1], [-3, 0], [5, -2]], numpy.array([0, 0]), numpy.array([2, 0]))
        npt.assert_allclose(distances, [1, 3, 3.605551275463989])
        degenerate = geometry.distances_to_line_segment([[3, 4]], numpy.array([0, 0]), numpy.array([0, 0]))
        npt.assert_allclose(degenerate, [5])

    def test_coincident(self):
        assert geometry.coincident([1, 1], [1 + 1e-12, 1])
        assert not geometry.coincident([1, 1], [1 + 1e-6, 1])
        assert geometry.coincident([0, 0, 0], [0, 0, 0])
        assert not geometry.coincident([0, 0], [1e-30, 0])
