"""Geometry of a single path segment: a straight line, or a quadratic or cubic
Bezier curve, in two or three dimensions.

A segment is described by its control points: the start point, zero to two
interior control points, and the end point. Everything here is parameterized
by the segment's local parameter t, which runs from 0 at the start point to 1
at the end point.

Pointwise queries go through a SegmentEvaluator and take a LocalParams
instance, which caches the powers of t and (1-t) needed by the Bernstein
polynomials. Queries over many parameter values at once (as needed for
numerical integration) are vectorized methods on the Segment itself.

Example:
    segment = Segment([[1, 0], [1, 0.55], [0.55, 1], [0, 1]])
    evaluator = SegmentEvaluator(segment)
    lp = LocalParams(0.5)
    evaluator.position(lp) # array([0.70625, 0.70625])
    evaluator.curvature(lp) # close to 1
"""

import collections
import math

import numpy

from . import geometry
from ..errors import DomainError

LINE = 1
QUAD = 2
CUBIC = 3

KIND_NAMES = {LINE: 'line', QUAD: 'quad', CUBIC: 'cubic'}

_LocalParams = collections.namedtuple('LocalParams',
    ('t', 't1', 'tt', 't1t', 't1t1', 'ttt', 't1tt', 't1t1t', 't1t1t1'))

class LocalParams(_LocalParams):
    """Powers of a local parameter t and of t1 = 1-t, up to third order.

    Field names spell out the product they hold: e.g. t1t1t is (1-t)**2 * t.
    Instances are immutable and compare equal (and hash) by t alone.
    """
    __slots__ = ()

    def __new__(cls, t):
        t = float(t)
        if not 0 <= t <= 1: # also rejects nan
            raise DomainError('Local parameter {} is not in the range [0, 1].'.format(t))
        t1 = 1.0 - t
        tt = t*t
        t1t = t1*t
        t1t1 = t1*t1
        return super().__new__(cls, t, t1, tt, t1t, t1t1, tt*t, t1*tt, t1t1*t, t1t1*t1)

    def __eq__(self, other):
        return isinstance(other, LocalParams) and self.t == other.t

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.t)

    def __repr__(self):
        return 'LocalParams({!r})'.format(self.t)

START = LocalParams(0.0)
END = LocalParams(1.0)


def _bernstein(degree, ts):
    """Bernstein basis polynomials of a given degree, evaluated at each of ts.

    Returns array of shape ts.shape + (degree+1,)"""
    ts = numpy.asarray(ts, dtype=float)[..., numpy.newaxis]
    k = numpy.arange(degree + 1)
    binomial = numpy.array([math.comb(degree, i) for i in k], dtype=float)
    return binomial * ts**k * (1 - ts)**(degree - k)


class Segment:
    """Immutable control-point description of one path segment.

    Parameters:
        points: array of shape (degree+1, d), where degree is 1 (line),
            2 (quadratic) or 3 (cubic) and d is 2 or 3.

    Attributes:
        points: read-only copy of the control points.
        diffs: read-only differences between successive control points,
            shape (degree, d). The derivatives of the segment are expressed
            in terms of these.
        degree, dimensions: as above.
    """
    def __init__(self, points):
        points = numpy.array(points, dtype=float)
        if points.ndim != 2 or not 2 <= len(points) <= 4:
            raise ValueError('A segment needs between 2 and 4 control points.')
        if points.shape[1] not in (2, 3):
            raise ValueError('Only 2D and 3D segments are supported.')
        points.flags.writeable = False
        diffs = numpy.diff(points, axis=0)
        diffs.flags.writeable = False
        self.points = points
        self.diffs = diffs
        self.degree = len(points) - 1
        self.dimensions = points.shape[1]

    @classmethod
    def line(cls, start, end):
        return cls([start, end])

    @property
    def start(self):
        return self.points[0]

    @property
    def end(self):
        return self.points[-1]

    @property
    def kind(self):
        return KIND_NAMES[self.degree]

    def __repr__(self):
        return 'Segment({}, {})'.format(self.kind, self.points.tolist())

    def is_degenerate(self):
        """True if every control point equals the start point."""
        return bool((self.points == self.points[0]).all())

    def chord_length(self):
        return geometry.norm(self.end - self.start)

    def control_length(self):
        """Length of the control polygon, an upper bound on the arc length."""
        return geometry.polyline_length(self.points)

    def points_at(self, ts):
        """Positions at each of the local parameters ts. Returns an array of
        shape ts.shape + (d,)"""
        return _bernstein(self.degree, ts) @ self.points

    def velocities_at(self, ts):
        """First derivatives at each of the local parameters ts."""
        return self.degree * (_bernstein(self.degree - 1, ts) @ self.diffs)

    def speeds(self, ts):
        """ds/dt at each of the local parameters ts."""
        velocities = self.velocities_at(ts)
        return numpy.sqrt((velocities**2).sum(axis=-1))

    def stationary_parameters(self):
        """Local parameters strictly between 0 and 1 at which the velocity
        vanishes (cusps), in increasing order.

        Each coordinate of the velocity is a polynomial in t of degree one less
        than the segment; candidates are the real roots of any coordinate,
        kept only where the whole velocity vanishes."""
        if self.degree == LINE:
            return []
        d = self.diffs
        if self.degree == QUAD:
            coefficients = numpy.array([d[1] - d[0], d[0]])
        else:
            coefficients = numpy.array([d[0] - 2*d[1] + d[2], 2*(d[1] - d[0]), d[0]])
        scale = numpy.absolute(d).max()
        if scale == 0:
            return []
        candidates = []
        for axis in range(self.dimensions):
            for root in numpy.roots(coefficients[:, axis]):
                if abs(root.imag) <= 1e-6 and 1e-9 < root.real < 1 - 1e-9:
                    candidates.append(float(root.real))
        stationary = []
        for t in sorted(candidates):
            if stationary and t - stationary[-1] <= 1e-9:
                continue
            if self.speeds(t) <= 1e-9 * self.degree * scale:
                stationary.append(t)
        return stationary

    def split_at(self, ts):
        """Split the segment at each of the increasing local parameters ts.

        Returns a list of len(ts) + 1 segments which, joined end to end,
        trace this one."""
        pieces = []
        rest = self
        previous = 0.0
        for t in ts:
            left, rest = rest.split((t - previous) / (1 - previous))
            pieces.append(left)
            previous = t
        pieces.append(rest)
        return pieces

    def split(self, t):
        """Split the segment at local parameter t with de Casteljau's algorithm.

        Returns (left, right) segments of the same degree covering [0, t] and
        [t, 1] respectively."""
        levels = [self.points]
        current = self.points
        while len(current) > 1:
            current = (1 - t) * current[:-1] + t * current[1:]
            levels.append(current)
        left = [level[0] for level in levels]
        right = [level[-1] for level in reversed(levels)]
        return Segment(left), Segment(right)

    def flatness(self):
        """Largest distance from an interior control point to the chord."""
        if self.degree == LINE:
            return 0.0
        return geometry.distances_to_line_segment(self.points[1:-1], self.start, self.end).max()

    def flatten(self, tolerance, limit=10):
        """Recursively subdivide the segment until each piece has a flatness
        no greater than tolerance, or until limit levels of subdivision.

        Returns a list of segments which, joined end to end, trace this one."""
        if limit <= 0 or self.flatness() <= tolerance:
            return [self]
        left, right = self.split(0.5)
        return left.flatten(tolerance, limit - 1) + right.flatten(tolerance, limit - 1)


ClosingEdge = collections.namedtuple('ClosingEdge', ('predecessor',))
ClosingEdge.__doc__ = """Marks a segment as the edge that closes a path.

If the closing edge has zero length, queries for its direction and curvature
at t=0 are answered by the predecessor (the evaluator of the previous segment,
or None) at t=1, so that the path's geometry continues across the seam."""


class SegmentEvaluator:
    """Position, derivatives, curvature, torsion and the Frenet frame of a
    segment, as pure functions of a LocalParams.

    Parameters:
        segment: Segment instance
        closing_edge: None, or a ClosingEdge if this segment closes the path.

    Vector-valued queries return numpy arrays of length d. The tangent,
    normal and binormal are unit vectors, or zero vectors where they do not
    exist; use the matching *_exists() predicate to tell which.
    """
    def __init__(self, segment, closing_edge=None):
        self.segment = segment
        self.closing_edge = closing_edge
        self.degree = segment.degree
        self.dimensions = segment.dimensions
        self.degenerate = segment.is_degenerate()

    def __repr__(self):
        closing = ', closing' if self.closing_edge is not None else ''
        return 'SegmentEvaluator({!r}{})'.format(self.segment, closing)

    def _collapsed_close(self):
        return self.closing_edge is not None and self.degree == LINE and self.degenerate

    def _seam_predecessor(self, lp):
        """For a zero-length closing edge, the evaluator to ask at t=1 in place
        of this one, or None if there is no such evaluator."""
        if lp.t > 0:
            return None
        return self.closing_edge.predecessor

    def position(self, lp):
        p = self.segment.points
        if self.degree == LINE:
            return p[0]*lp.t1 + p[1]*lp.t
        elif self.degree == QUAD:
            return lp.t1t1*p[0] + 2*lp.t1t*p[1] + lp.tt*p[2]
        else:
            return lp.t1t1t1*p[0] + 3*(lp.t1t1t*p[1] + lp.t1tt*p[2]) + lp.ttt*p[3]

    def velocity(self, lp):
        """dP/dt"""
        d = self.segment.diffs
        if self.degree == LINE:
            return d[0].copy()
        elif self.degree == QUAD:
            return 2*(lp.t1*d[0] + lp.t*d[1])
        else:
            return 3*(lp.t1t1*d[0] + 2*lp.t1t*d[1] + lp.tt*d[2])

    def acceleration(self, lp):
        """d^2P/dt^2"""
        d = self.segment.diffs
        if self.degree == LINE:
            return numpy.zeros(self.dimensions)
        elif self.degree == QUAD:
            return 2*(d[1] - d[0])
        else:
            return 6*(lp.t1*(d[1] - d[0]) + lp.t*(d[2] - d[1]))

    def jerk(self, lp):
        """d^3P/dt^3: constant, and nonzero only for cubic segments."""
        d = self.segment.diffs
        if self.degree == CUBIC:
            return 6*((d[2] - d[1]) - (d[1] - d[0]))
        return numpy.zeros(self.dimensions)

    def ds_dt(self, lp):
        return geometry.norm(self.velocity(lp))

    def d2s_dt2(self, lp):
        """Second derivative of arc length; nan where the speed is zero."""
        if self.degree == LINE:
            return 0.0
        v = self.velocity(lp)
        speed_squared = numpy.dot(v, v)
        if speed_squared == 0:
            return math.nan
        return numpy.dot(v, self.acceleration(lp)) / math.sqrt(speed_squared)

    def curvature(self, lp):
        """Curvature: signed in 2D (positive when the tangent turns
        counterclockwise), non-negative in 3D. nan where undefined."""
        if self._collapsed_close():
            predecessor = self._seam_predecessor(lp)
            return math.nan if predecessor is None else predecessor.curvature(END)
        if self.degree == LINE:
            return 0.0
        v = self.velocity(lp)
        a = self.acceleration(lp)
        speed_squared = numpy.dot(v, v)
        if speed_squared == 0:
            # e.g. a curve that doubles back on itself along a line: at the
            # turning point the curvature's sign cannot be determined.
            return math.nan
        denominator = speed_squared * math.sqrt(speed_squared)
        if self.dimensions == 2:
            return geometry.cross(v, a) / denominator
        return geometry.norm(geometry.cross(v, a)) / denominator

    def torsion(self, lp):
        """Torsion of a 3D segment; nan where the curvature is zero."""
        if self.dimensions != 3:
            raise DomainError('Torsion is only defined for 3D paths.')
        if self._collapsed_close():
            predecessor = self._seam_predecessor(lp)
            return math.nan if predecessor is None else predecessor.torsion(END)
        if self.degree == LINE:
            return 0.0
        v = self.velocity(lp)
        a = self.acceleration(lp)
        v_cross_a = geometry.cross(v, a)
        denominator = numpy.dot(v_cross_a, v_cross_a)
        if denominator == 0:
            return math.nan
        return numpy.dot(v, geometry.cross(a, self.jerk(lp))) / denominator

    def curvature_exists(self, lp):
        if self._collapsed_close():
            predecessor = self._seam_predecessor(lp)
            return predecessor is not None and predecessor.curvature_exists(END)
        return not self.degenerate

    def _endpoint_direction(self, lp):
        """Direction of travel where the velocity vanishes because control
        points coincide with an end point. Returns None if there is none."""
        p = self.segment.points
        direction = None
        if self.degree == QUAD:
            if (p[1] == p[0]).all():
                direction = p[2] - p[1]
            elif (p[1] == p[2]).all():
                direction = p[1] - p[0]
        elif self.degree == CUBIC:
            if (p[1] == p[0]).all():
                if (p[2] == p[1]).all():
                    direction = p[3] - p[2]
                elif lp.t == 0:
                    direction = p[2] - p[1]
            elif (p[2] == p[3]).all():
                if (p[1] == p[2]).all():
                    direction = p[1] - p[0]
                elif lp.t == 1:
                    direction = p[2] - p[1]
        if direction is None or not direction.any():
            return None
        return direction

    def _tangent(self, lp):
        if self._collapsed_close():
            predecessor = self._seam_predecessor(lp)
            return None if predecessor is None else predecessor._tangent(END)
        v = self.velocity(lp)
        speed = geometry.norm(v)
        if speed == 0:
            v = self._endpoint_direction(lp)
            if v is None:
                return None
            speed = geometry.norm(v)
        tangent = v / speed
        tangent[tangent == 0] = 0.0 # no negative zeros
        return tangent

    def _normal(self, lp, recover=True):
        if self._collapsed_close():
            predecessor = self._seam_predecessor(lp)
            return None if predecessor is None else predecessor._normal(END, recover)
        tangent = self._tangent(lp)
        if tangent is None:
            return None
        if self.dimensions == 2:
            # rotate the tangent counterclockwise: with signed curvature this
            # gives d^2r/ds^2 = kN, and a normal exists even for straight lines.
            return geometry.find_perp(tangent)
        if self.degree == LINE:
            return None
        a = self.acceleration(lp)
        # component of the acceleration perpendicular to the direction of travel
        perp = a - numpy.dot(a, tangent) * tangent
        length = geometry.norm(perp)
        if length == 0:
            if self.degree != CUBIC or not recover:
                return None
            # near an inflection: borrow the binormal from the opposite end
            binormal = self._binormal(END if lp.t <= 0.5 else START, recover=False)
            if binormal is None:
                return None
            normal = geometry.cross(binormal, tangent)
            return normal / geometry.norm(normal)
        return perp / length

    def _binormal(self, lp, recover=True):
        tangent = self._tangent(lp)
        if tangent is None:
            return None
        normal = self._normal(lp, recover)
        if normal is None:
            return None
        return geometry.cross(tangent, normal)

    def tangent(self, lp):
        tangent = self._tangent(lp)
        return numpy.zeros(self.dimensions) if tangent is None else tangent

    def tangent_exists(self, lp):
        return self._tangent(lp) is not None

    def normal(self, lp):
        """Unit normal, oriented so that d^2r/ds^2 = kN (k is the curvature)."""
        normal = self._normal(lp)
        return numpy.zeros(self.dimensions) if normal is None else normal

    def normal_exists(self, lp):
        return self._normal(lp) is not None

    def binormal(self, lp):
        """Unit binormal T x N of a 3D segment."""
        if self.dimensions != 3:
            raise DomainError('The binormal is only defined for 3D paths.')
        binormal = self._binormal(lp)
        return numpy.zeros(3) if binormal is None else binormal

    def binormal_exists(self, lp):
        if self.dimensions != 3:
            raise DomainError('The binormal is only defined for 3D paths.')
        return self._binormal(lp) is not None
