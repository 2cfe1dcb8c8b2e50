"""The SplinePath class: a path of line and Bezier segments, queried by path
parameter or by arc length.

Example:
    from splinepath.path import commands
    path = SplinePath([
        commands.move(0, 0),
        commands.line(10, 0),
        commands.cubic(15, 0, 15, 5, 10, 5),
        commands.close()])
    path.segment_count() # 3: line, cubic and the closing edge
    path.path_length()
    u = path.u(12.5) # path parameter 12.5 units along the path
    path.tangent(u)

The drawing commands are read when the path is first queried, and again
whenever refresh() is called. To follow a path that is being edited
elsewhere, pass a callable that returns the current commands.
"""

import logging
import sys

from . import distance
from . import index as path_index
from . import lengths
from .location import Location, decompose
from ..curve import bezier
from ..curve import interpolate
from ..curve import quadrature
from .. import util

logger = logging.getLogger(__name__)

class PathSnapshot:
    """Everything built from one reading of the drawing commands.

    The segment array is fixed when the snapshot is made; the LengthModel is
    built on first use.
    """
    def __init__(self, index, version, intervals=None, inversion_limit=-1):
        self.index = index
        self.version = version
        self._intervals = intervals
        self._inversion_limit = inversion_limit
        self._lengths = None

    @property
    def segment_count(self):
        return len(self.index.segments)

    @property
    def closed(self):
        return self.index.closed

    @property
    def lengths(self):
        if self._lengths is None:
            self._lengths = lengths.LengthModel(self.index, self._intervals, self._inversion_limit)
            logger.debug('Computed lengths of %d segments: total %r', self.segment_count, self._lengths.total)
        return self._lengths

    def set_intervals(self, intervals):
        self._intervals = intervals
        if self._lengths is not None:
            self._lengths.set_intervals(intervals)

    def set_inversion_limit(self, inversion_limit):
        self._inversion_limit = inversion_limit
        if self._lengths is not None:
            self._lengths.set_inversion_limit(inversion_limit)

    def locate(self, u):
        """Return (evaluator, LocalParams) for path parameter u."""
        i, t = decompose(u, self.segment_count, self.closed)
        return self.index.evaluators[i], bezier.LocalParams(t)

    def distance(self, u1, u2, enhanced=False):
        return distance.distance(self.lengths, u1, u2, enhanced)

    def parameter_at(self, s, enhanced=False):
        return distance.parameter_at(self.lengths, s, enhanced)


class SplinePath:
    """A continuous path of straight, quadratic and cubic Bezier segments.

    Parameters:
        commands: the drawing commands (see path.commands): either a
            re-iterable sequence of (op, coords) pairs, or a callable
            returning an iterable of them.
        intervals: number of intervals of the per-segment sublength splines
            used to map arc length to path parameter; None or 0 uses the
            process default (see curve.quadrature.set_default_intervals).
            Must otherwise be at least 5.
        inversion_limit: tolerance for accepting roots found when inverting
            a sublength spline. Negative values select the default.
        enhanced_accuracy: if True, measure partial segments by exact
            integration rather than with the sublength splines, and refine
            inverted arc lengths with Newton's method. Slower.
    """
    def __init__(self, commands, intervals=None, inversion_limit=-1.0, enhanced_accuracy=False):
        self._source = commands
        if intervals:
            quadrature.resolve_intervals(intervals) # validate now
        self._intervals = intervals
        self._inversion_limit = interpolate.resolve_inversion_limit(inversion_limit)
        self.enhanced_accuracy = bool(enhanced_accuracy)
        self.version = 0
        self._snapshot = None

    def __repr__(self):
        if self._snapshot is None:
            return 'SplinePath(<not built>)'
        return 'SplinePath({} segments, {})'.format(self._snapshot.segment_count,
            'closed' if self._snapshot.closed else 'open')

    @property
    def snapshot(self):
        if self._snapshot is None:
            self._build()
        return self._snapshot

    def _build(self):
        source = self._source() if callable(self._source) else self._source
        index = path_index.build_index(source)
        self.version += 1
        self._snapshot = PathSnapshot(index, self.version, self._intervals, self._inversion_limit)
        logger.debug('Built path version %d: %d segments, closed=%s, synthesized closing edge=%s',
            self.version, len(index.segments), index.closed, index.synthesized_close)

    def refresh(self):
        """Re-read the drawing commands and rebuild the path. Locations
        obtained before the refresh become stale."""
        self._snapshot = None
        self._build()

    def invalidate(self):
        """Discard the built path; it will be rebuilt on the next query.
        Locations obtained before this call become stale."""
        self.version += 1
        self._snapshot = None

    # configuration

    def interval_count(self):
        if self._snapshot is not None and self._snapshot._lengths is not None:
            return self._snapshot.lengths.intervals
        return quadrature.resolve_intervals(self._intervals)

    def set_interval_count(self, intervals):
        """Set the number of intervals of the sublength splines (None or 0 for
        the process default). Cached splines are discarded."""
        quadrature.resolve_intervals(intervals)
        self._intervals = intervals
        if self._snapshot is not None:
            self._snapshot.set_intervals(intervals)
        logger.debug('Interval count set to %r', intervals)

    @property
    def inversion_limit(self):
        return self._inversion_limit

    @inversion_limit.setter
    def inversion_limit(self, inversion_limit):
        self._inversion_limit = interpolate.resolve_inversion_limit(inversion_limit)
        if self._snapshot is not None:
            self._snapshot.set_inversion_limit(self._inversion_limit)
        logger.debug('Inversion limit set to %r', self._inversion_limit)

    # structure

    def is_closed(self):
        return self.snapshot.closed

    def segment_count(self):
        return self.snapshot.segment_count

    def max_parameter(self):
        """Largest path parameter of an open path: the number of segments."""
        return self.snapshot.segment_count

    def dimensions(self):
        return self.snapshot.index.dimensions

    def get_segment(self, i):
        """Return the curve.bezier.Segment with index i."""
        return self.snapshot.index.segments[i]

    # queries by path parameter

    def get_location(self, u):
        """Return a Location for path parameter u, for repeated queries at
        the same point."""
        return Location(self, self.snapshot, u)

    def _evaluate(self, u):
        return self.snapshot.locate(u)

    def position(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.position(lp)

    def velocity(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.velocity(lp)

    def acceleration(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.acceleration(lp)

    def jerk(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.jerk(lp)

    def ds_du(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.ds_dt(lp)

    def d2s_du2(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.d2s_dt2(lp)

    def curvature(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.curvature(lp)

    def curvature_exists(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.curvature_exists(lp)

    def torsion(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.torsion(lp)

    def tangent(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.tangent(lp)

    def tangent_exists(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.tangent_exists(lp)

    def normal(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.normal(lp)

    def normal_exists(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.normal_exists(lp)

    def binormal(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.binormal(lp)

    def binormal_exists(self, u):
        evaluator, lp = self._evaluate(u)
        return evaluator.binormal_exists(lp)

    # lengths

    def path_length(self, u1=None, u2=None):
        """Length of the whole path, or with u1 and u2 given, the unsigned arc
        length between those path parameters."""
        if u1 is None and u2 is None:
            return self.snapshot.lengths.total
        if u1 is None or u2 is None:
            raise ValueError('Both path parameters are needed for a partial path length.')
        return abs(self.distance(u1, u2))

    def distance(self, u1, u2):
        """Signed arc length from path parameter u1 to u2."""
        return self.snapshot.distance(u1, u2, self.enhanced_accuracy)

    def s(self, u):
        """Signed arc length from the start of the path to path parameter u."""
        return self.distance(0, u)

    def u(self, s):
        """Path parameter at arc length s from the start of the path."""
        return self.snapshot.parameter_at(s, self.enhanced_accuracy)

    # queries by arc length

    def get_location_at_distance(self, s):
        return self.get_location(self.u(s))

    def point_at_distance(self, s):
        return self.position(self.u(s))

    # diagnostics

    def segment_table(self):
        """Return a list with a dict of information for each segment: its
        kind, control points, length, and the cumulative length at its start."""
        snapshot = self.snapshot
        model = snapshot.lengths
        table = []
        for i, evaluator in enumerate(snapshot.index.evaluators):
            segment = evaluator.segment
            table.append(dict(
                index=i,
                kind=segment.kind,
                points=segment.points.tolist(),
                length=float(model.segment_lengths[i]),
                start_length=float(model.cumulative[i]),
                closing_edge=evaluator.closing_edge is not None
            ))
        return table

    def segment_table_json(self):
        return util.json_encode_legible_to_str(dict(
            closed=self.snapshot.closed,
            dimensions=self.snapshot.index.dimensions,
            length=self.snapshot.lengths.total,
            segments=self.segment_table()
        ))

    def print_table(self, prefix='', file=None):
        """Print a human-readable table of the segments of the path, each line
        beginning with prefix, to file (default sys.stdout)."""
        if file is None:
            file = sys.stdout
        snapshot = self.snapshot
        print('{}{} path, {} segments, length {!r}'.format(prefix,
            'closed' if snapshot.closed else 'open', snapshot.segment_count,
            snapshot.lengths.total), file=file)
        for row in self.segment_table():
            closing = ' (closing edge)' if row['closing_edge'] else ''
            print('{}  segment {}: {}{}, length {!r}, starting at {!r}'.format(prefix,
                row['index'], row['kind'], closing, row['length'], row['start_length']), file=file)
            for point in row['points']:
                print('{}    {}'.format(prefix, ', '.join(repr(c) for c in point)), file=file)
