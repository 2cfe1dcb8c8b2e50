"""
SplinePath tests: the worked scenarios and whole-path properties.
"""

import io
import json
import logging
import math

import numpy
import numpy.testing as npt
import pytest

from splinepath import SplinePath, DomainError, StructuralError, ConvergenceFailure, PathError
from splinepath.curve import bezier
from splinepath.curve import interpolate
from splinepath.curve import quadrature
from splinepath.path import commands


class TestStraightLine:
    """A single line from (0, 0) to (10, 0)."""

    def test_length(self, line_commands):
        path = SplinePath(line_commands)
        assert path.path_length() == 10
        assert path.max_parameter() == 1
        assert not path.is_closed()

    def test_inverse(self, line_commands):
        path = SplinePath(line_commands)
        assert path.u(5) == 0.5
        assert path.s(0.5) == 5
        npt.assert_array_equal(path.point_at_distance(2.5), [2.5, 0])

    def test_geometry(self, line_commands):
        path = SplinePath(line_commands)
        assert path.curvature(0.5) == 0
        npt.assert_array_equal(path.tangent(0.5), [1, 0])
        npt.assert_array_equal(path.normal(0.5), [0, 1])
        assert path.ds_du(0.3) == 10
        assert path.d2s_du2(0.3) == 0


class TestClosedTriangle:
    """Equilateral triangle with unit edges, closed by a synthesized edge."""

    def test_structure(self, triangle_commands):
        path = SplinePath(triangle_commands)
        assert path.is_closed()
        assert path.segment_count() == 3
        assert path.get_segment(2).kind == 'line'

    def test_lengths(self, triangle_commands):
        path = SplinePath(triangle_commands)
        assert path.distance(0, 3) == pytest.approx(3)
        assert path.path_length() == pytest.approx(3)
        assert path.distance(0, 3) == pytest.approx(path.path_length())

    def test_inverse(self, triangle_commands):
        path = SplinePath(triangle_commands)
        u = path.u(1.5)
        assert math.floor(u) == 1
        assert u - 1 == pytest.approx(0.5)
        location = path.get_location_at_distance(1.5)
        assert location.segment_index == 1
        assert location.local_parameter == pytest.approx(0.5)

    def test_wraps(self, triangle_commands):
        path = SplinePath(triangle_commands)
        npt.assert_allclose(path.position(3.25), path.position(0.25))
        npt.assert_allclose(path.position(-0.5), path.position(2.5))
        assert path.curvature(5) == 0

    def test_closing_edge_in_table(self, triangle_commands):
        table = SplinePath(triangle_commands).segment_table()
        assert [row['closing_edge'] for row in table] == [False, False, True]


class TestCircularArc:
    """Cubic approximations of quarter circles."""

    def test_unit_radius(self, quarter_circle_commands):
        path = SplinePath(quarter_circle_commands)
        assert path.curvature(0.5) == pytest.approx(1, rel=1e-2)
        assert path.path_length() == pytest.approx(math.pi / 2, rel=1e-3)

    def test_radius_scaling(self, quarter_circle):
        path = SplinePath(quarter_circle(2.5))
        assert path.curvature(0.5) == pytest.approx(1 / 2.5, rel=1e-2)
        # counterclockwise, so the normal points at the center
        npt.assert_allclose(path.normal(0.5), -path.position(0.5) / 2.5, atol=1e-2)

    def test_equal_spacing(self, quarter_circle_commands):
        path = SplinePath(quarter_circle_commands)
        total = path.path_length()
        points = [path.point_at_distance(s) for s in numpy.linspace(0, total, 9)]
        chords = numpy.linalg.norm(numpy.diff(points, axis=0), axis=1)
        npt.assert_allclose(chords, chords[0], rtol=1e-4)


class TestSeam:
    """Paths that return exactly to their starting point before closing."""

    def test_no_synthesized_edge(self):
        path = SplinePath([
            commands.move(0, 0),
            commands.line(2, 0),
            commands.quad(2, 2, 0, 0),
            commands.close()])
        assert path.is_closed()
        assert path.segment_count() == 2
        assert not path.snapshot.index.synthesized_close

    def test_zero_length_closing_edge(self):
        path = SplinePath([
            commands.move(0, 0),
            commands.line(2, 0),
            commands.quad(2, 2, 0, 0),
            commands.line(0, 0),
            commands.close()])
        assert path.segment_count() == 3
        quad = path.snapshot.index.evaluators[1]
        assert path.curvature_exists(2) == quad.curvature_exists(bezier.END)
        assert path.curvature(2) == quad.curvature(bezier.END)
        npt.assert_array_equal(path.tangent(2), quad.tangent(bezier.END))
        assert not path.curvature_exists(2.5)
        assert not path.tangent_exists(2.5)
        npt.assert_array_equal(path.tangent(2.5), [0, 0])
        assert path.tangent_exists(1.5)
        assert path.path_length() == pytest.approx(path.distance(0, 2))


class TestProperties:
    """Properties that hold for every path."""

    @pytest.fixture(params=['mixed_commands', 'triangle_commands', 'space_curve_commands'])
    def path(self, request):
        return SplinePath(request.getfixturevalue(request.param))

    def test_location_equivalence(self, path):
        for u in numpy.linspace(0, path.max_parameter(), 17):
            npt.assert_array_equal(path.position(u), path.get_location(u).position())

    def test_tangent_norm(self, path):
        for u in numpy.linspace(0, path.max_parameter(), 31):
            norm = numpy.linalg.norm(path.tangent(u))
            assert norm == 0 or norm == pytest.approx(1, abs=1e-15)

    def test_round_trip(self, path):
        for s in numpy.linspace(0, path.path_length(), 23):
            assert path.distance(0, path.u(s)) == pytest.approx(s, abs=1e-9)

    def test_antisymmetry(self, path):
        n = path.max_parameter()
        for u1, u2 in [(0, n), (0.3, n - 0.6), (n * 0.75, 0.1)]:
            assert path.distance(u1, u2) == -path.distance(u2, u1)

    def test_refresh_idempotent(self, path):
        path.refresh()
        first = path.snapshot
        points = [segment.points.copy() for segment in first.index.segments]
        cumulative = first.lengths.cumulative.copy()
        path.refresh()
        second = path.snapshot
        assert second is not first
        assert second.version > first.version
        for segment, expected in zip(second.index.segments, points):
            npt.assert_array_equal(segment.points, expected)
        npt.assert_array_equal(second.lengths.cumulative, cumulative)

    def test_unsigned_path_length(self, path):
        assert path.path_length(0.7, 0.2) == path.path_length(0.2, 0.7) > 0


class TestSpaceCurve:
    """3D paths."""

    def test_torsion_and_binormal(self, space_curve_commands):
        path = SplinePath(space_curve_commands)
        assert path.dimensions() == 3
        assert path.torsion(0) == pytest.approx(1 / 3)
        npt.assert_allclose(path.binormal(0), [0, 0, 1])
        assert path.torsion(1.5) == 0

    def test_frame_existence(self, space_curve_commands):
        path = SplinePath(space_curve_commands)
        assert path.tangent_exists(0.5)
        assert path.normal_exists(0.5)
        assert path.binormal_exists(0.5)
        # the straight second segment has a tangent but no normal
        assert path.tangent_exists(1.5)
        assert not path.normal_exists(1.5)
        assert not path.binormal_exists(1.5)
        npt.assert_array_equal(path.normal(1.5), [0, 0, 0])

    def test_2d_only_queries(self, mixed_commands):
        path = SplinePath(mixed_commands)
        with pytest.raises(DomainError):
            path.torsion(1.5)
        with pytest.raises(DomainError):
            path.binormal(1.5)
        with pytest.raises(DomainError):
            path.binormal_exists(1.5)


class TestErrors:
    """Tests for errors raised by SplinePath."""

    def test_hierarchy(self):
        for error in (DomainError, StructuralError, ConvergenceFailure):
            assert issubclass(error, PathError)
        assert issubclass(DomainError, ValueError)

    def test_structural_error_is_lazy(self):
        path = SplinePath([commands.line(1, 1)])
        with pytest.raises(StructuralError):
            path.segment_count()

    def test_open_domain(self, line_commands):
        path = SplinePath(line_commands)
        with pytest.raises(DomainError):
            path.position(1.5)
        with pytest.raises(DomainError):
            path.u(11)

    def test_partial_path_length_arguments(self, line_commands):
        with pytest.raises(ValueError):
            SplinePath(line_commands).path_length(0.5)


class TestSourceAndConfiguration:
    """Tests for command sources, refresh, and configuration."""

    def test_callable_source(self):
        stream = [commands.move(0, 0), commands.line(1, 0)]
        path = SplinePath(lambda: list(stream))
        assert path.path_length() == 1
        stream.append(commands.line(1, 2))
        # not seen until the path is rebuilt
        assert path.segment_count() == 1
        path.refresh()
        assert path.segment_count() == 2
        assert path.path_length() == 3

    def test_invalidate_rebuilds_lazily(self):
        stream = [commands.move(0, 0), commands.line(1, 0)]
        path = SplinePath(stream)
        version = path.snapshot.version
        stream.append(commands.line(1, 1))
        path.invalidate()
        assert path.segment_count() == 2
        assert path.snapshot.version > version

    def test_interval_count(self, mixed_commands):
        path = SplinePath(mixed_commands, intervals=10)
        assert path.interval_count() == 10
        u = path.u(7)
        path.set_interval_count(40)
        assert path.interval_count() == 40
        assert len(path.snapshot.lengths.sublength(2).knots) == 41
        assert path.u(7) == pytest.approx(u, abs=1e-4)
        path.set_interval_count(0)
        assert path.interval_count() == quadrature.default_intervals()

    @pytest.mark.parametrize('intervals', [1, 4, -3])
    def test_invalid_interval_count(self, mixed_commands, intervals):
        with pytest.raises(ValueError):
            SplinePath(mixed_commands, intervals=intervals)
        with pytest.raises(ValueError):
            SplinePath(mixed_commands).set_interval_count(intervals)

    def test_inversion_limit(self, mixed_commands):
        path = SplinePath(mixed_commands)
        assert path.inversion_limit == interpolate.DEFAULT_INVERSION_LIMIT
        path.inversion_limit = 1e-6
        assert path.snapshot.lengths.sublength(2).inversion_limit == 1e-6
        path.inversion_limit = -2
        assert path.inversion_limit == interpolate.DEFAULT_INVERSION_LIMIT

    def test_enhanced_accuracy(self, mixed_commands):
        default = SplinePath(mixed_commands)
        enhanced = SplinePath(mixed_commands, enhanced_accuracy=True)
        for s in (1, 5.5, 9):
            assert enhanced.u(s) == pytest.approx(default.u(s), abs=1e-8)

    def test_rebuild_logged(self, line_commands, caplog):
        caplog.set_level(logging.DEBUG, logger='splinepath')
        path = SplinePath(line_commands)
        path.refresh()
        assert 'Built path version 1' in caplog.text


class TestDiagnostics:
    """Tests for the segment table outputs."""

    def test_segment_table(self, mixed_commands):
        path = SplinePath(mixed_commands)
        table = path.segment_table()
        assert [row['kind'] for row in table] == ['line', 'quad', 'cubic']
        assert table[0]['length'] == 4
        assert table[1]['start_length'] == 4
        assert table[2]['points'][-1] == [1, 6]

    def test_json(self, mixed_commands):
        data = json.loads(SplinePath(mixed_commands).segment_table_json())
        assert data['closed'] is False
        assert data['dimensions'] == 2
        assert len(data['segments']) == 3

    def test_print_table(self, triangle_commands):
        out = io.StringIO()
        SplinePath(triangle_commands).print_table(prefix='# ', file=out)
        lines = out.getvalue().splitlines()
        assert lines[0].startswith('# closed path, 3 segments')
        assert all(line.startswith('# ') for line in lines)
        assert any('closing edge' in line for line in lines)
