"""Hermite splines approximating arc length as a function of a segment's local
parameter, and their inverses.

A SublengthSpline interpolates the arc length s(t) of one segment (measured
from the start of the path, not of the segment) at evenly spaced knots in
t, using the exact derivative ds/dt at each knot. Evaluating the spline is
much cheaper than integrating the speed, and because each piece is a cubic
polynomial, the spline can be inverted in closed form to find the t at which
a given arc length is reached.
"""

import math

import numpy
from scipy import interpolate

from . import roots
from .. import util

DEFAULT_INVERSION_LIMIT = 1e-8

def resolve_inversion_limit(limit):
    """Return the inversion limit to use: negative values select the default."""
    limit = float(limit)
    if math.isnan(limit):
        raise ValueError('Inversion limit must be a number.')
    return DEFAULT_INVERSION_LIMIT if limit < 0 else limit


class SublengthSpline:
    """Cubic Hermite spline mapping local parameter t in [0, 1] to arc length.

    Parameters:
        knots: strictly increasing array of parameter values from 0 to 1.
        values: arc length at each knot.
        slopes: ds/dt at each knot.
        inversion_limit: how far outside the [0, 1] range of an interval's
            local coordinate a root of the inverse may fall and still be
            accepted (and clamped into range).
    """
    def __init__(self, knots, values, slopes, inversion_limit=DEFAULT_INVERSION_LIMIT):
        self.knots = numpy.asarray(knots, dtype=float)
        self.values = numpy.asarray(values, dtype=float)
        self.inversion_limit = inversion_limit
        self.spline = interpolate.CubicHermiteSpline(self.knots, self.values, slopes)
        # the inverse only makes sense on a strictly increasing spline
        self.invertible = bool((numpy.diff(self.values) > 0).all())

    @classmethod
    def for_segment(cls, segment, start, length, table, inversion_limit=DEFAULT_INVERSION_LIMIT):
        """Build the sublength spline of a segment.

        Parameters:
            segment: curve.bezier.Segment
            start: arc length from the start of the path to the start of the
                segment.
            length: exact length of the segment. The knot values are scaled so
                that the last one is start + length.
            table: curve.quadrature.IntervalTable that determines the knots.
            inversion_limit: see class documentation.
        """
        partial = util.compensated_cumsum(table.integrate(segment.speeds))
        if partial[-1] > 0:
            partial *= length / partial[-1]
        values = start + partial
        values[-1] = start + length
        slopes = segment.speeds(table.knots)
        return cls(table.knots, values, slopes, inversion_limit)

    def __call__(self, t):
        return float(self.spline(t))

    def derivative(self, t):
        return float(self.spline(t, 1))

    @property
    def start(self):
        return self.values[0]

    @property
    def end(self):
        return self.values[-1]

    def invert(self, s):
        """Return a roots.RootResult for the local parameter t at which the
        spline reaches arc length s.

        The interval containing s is found by bisection, and the cubic
        polynomial on that interval is solved exactly. The result has not
        converged if the spline is not strictly increasing, s is outside its
        range, or the interval does not contain exactly one root.
        """
        values = self.values
        if not self.invertible or not values[0] <= s <= values[-1]:
            return roots.failed('spline')
        if s == values[-1]:
            return roots.RootResult(float(self.knots[-1]), True, 'spline')
        i = numpy.searchsorted(values, s, side='right') - 1
        if values[i] == s:
            return roots.RootResult(float(self.knots[i]), True, 'spline')
        h = self.knots[i+1] - self.knots[i]
        c3, c2, c1, c0 = self.spline.c[:, i]
        # cubic in the interval's own coordinate tau = (t - knots[i]) / h
        candidates = numpy.roots([c3*h**3, c2*h**2, c1*h, c0 - s])
        real = candidates[numpy.absolute(candidates.imag) <= 1e-9].real
        limit = self.inversion_limit
        real = real[(real >= -limit) & (real <= 1 + limit)]
        if len(real) == 0:
            return roots.failed('spline')
        real = numpy.sort(real.clip(0, 1))
        # a double root shows up as two nearly equal roots
        real = real[numpy.concatenate([[True], numpy.diff(real) > 1e-12])]
        if len(real) != 1:
            return roots.failed('spline')
        return roots.RootResult(float(self.knots[i] + real[0] * h), True, 'spline')
