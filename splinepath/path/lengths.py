"""Arc lengths of segments and of paths.

Lines are measured exactly. Curved segments are split at any cusps, then
subdivided until each piece is nearly flat, and the speed of each piece is
integrated with a high-order Gauss-Legendre rule. The LengthModel of a path
holds the length of every segment, their running total, and (built on
demand) the sublength spline of each segment that maps its local parameter
to arc length.
"""

import logging

import numpy

from ..curve import bezier
from ..curve import interpolate
from ..curve import quadrature
from .. import util

logger = logging.getLogger(__name__)

FLATNESS = 0.05 # fraction of the chord length
FLATTEN_LIMIT = 10

def line_length(p0, p1):
    """Exact distance between two points, without rounding error when they
    differ along only one axis."""
    delta = numpy.absolute(numpy.asarray(p1, dtype=float) - p0)
    nonzero = numpy.flatnonzero(delta)
    if len(nonzero) == 0:
        return 0.0
    if len(nonzero) == 1:
        return float(delta[nonzero[0]])
    return float(numpy.sqrt(numpy.dot(delta, delta)))

def segment_length(segment):
    """Return the arc length of a curve.bezier.Segment."""
    if segment.degree == bezier.LINE:
        return line_length(segment.start, segment.end)
    scale = segment.chord_length()
    if scale == 0:
        # closed loop: fall back to the control polygon for the size of the curve
        scale = segment.control_length()
        if scale == 0:
            return 0.0
    # integrate separately on either side of any cusp, where the speed has a kink
    pieces = []
    for part in segment.split_at(segment.stationary_parameters()):
        pieces.extend(part.flatten(FLATNESS * scale, FLATTEN_LIMIT))
    return util.compensated_sum(quadrature.integrate(piece.speeds) for piece in pieces)

def partial_length(segment, t):
    """Return the arc length of a segment from its start to local parameter t."""
    if t <= 0:
        return 0.0
    if segment.degree == bezier.LINE:
        return min(t, 1.0) * line_length(segment.start, segment.end)
    if t >= 1:
        return segment_length(segment)
    left, right = segment.split(t)
    return segment_length(left)


class LengthModel:
    """Segment lengths, cumulative lengths and sublength splines of a path.

    Parameters:
        index: path.index.PathIndex
        intervals: number of intervals of the sublength splines, or None / 0
            for the process default (see curve.quadrature).
        inversion_limit: see curve.interpolate.SublengthSpline; negative
            values select the default.

    Attributes:
        segment_lengths: read-only array of shape (n,).
        cumulative: read-only array of shape (n+1,): cumulative[i] is the arc
            length from the start of the path to the start of segment i.
        total: length of the whole path.
    """
    def __init__(self, index, intervals=None, inversion_limit=-1):
        self.index = index
        self.segment_lengths = numpy.array([segment_length(segment) for segment in index.segments])
        self.segment_lengths.flags.writeable = False
        self.cumulative = util.compensated_cumsum(self.segment_lengths)
        self.cumulative.flags.writeable = False
        self.total = float(self.cumulative[-1])
        self.table = quadrature.interval_table(quadrature.resolve_intervals(intervals))
        self.inversion_limit = interpolate.resolve_inversion_limit(inversion_limit)
        self._splines = {}

    @property
    def segment_count(self):
        return len(self.segment_lengths)

    @property
    def intervals(self):
        return self.table.intervals

    def set_intervals(self, intervals):
        table = quadrature.interval_table(quadrature.resolve_intervals(intervals))
        if table is not self.table:
            self.table = table
            self.clear_splines()

    def set_inversion_limit(self, inversion_limit):
        inversion_limit = interpolate.resolve_inversion_limit(inversion_limit)
        if inversion_limit != self.inversion_limit:
            self.inversion_limit = inversion_limit
            self.clear_splines()

    def clear_splines(self):
        self._splines.clear()

    def sublength(self, i):
        """Return the SublengthSpline of segment i, building it if needed."""
        spline = self._splines.get(i)
        if spline is None:
            spline = interpolate.SublengthSpline.for_segment(self.index.segments[i],
                self.cumulative[i], self.segment_lengths[i], self.table, self.inversion_limit)
            self._splines[i] = spline
            logger.debug('Built sublength spline for segment %d with %d intervals', i, self.table.intervals)
        return spline

    def partial(self, i, t1, t2, enhanced=False):
        """Arc length along segment i from local parameter t1 to t2 (t1 <= t2).

        Uses the sublength spline, or if enhanced is True, exact integration.
        """
        if t1 == t2:
            return 0.0
        segment = self.index.segments[i]
        if segment.degree == bezier.LINE:
            return (t2 - t1) * self.segment_lengths[i]
        if enhanced:
            return partial_length(segment, t2) - partial_length(segment, t1)
        spline = self.sublength(i)
        return spline(t2) - spline(t1)
