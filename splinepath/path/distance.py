"""Arc length between path parameters, and its inverse.

distance() measures the signed arc length between two path parameters by
adding whole laps of a closed path, the lengths of whole segments (from the
cumulative length table), and partial segments at either end.

parameter_at() finds the path parameter at a given arc length from the start.
Within a segment this is a root-finding problem, attacked with a sequence of
fallible steps: exact inversion of the segment's sublength spline, optional
Newton refinement against the exact arc length, Brent's method on the
spline, and finally snapping to the nearer end of the segment.
"""

import logging
import math

import numpy

from . import lengths
from .location import ROUNDOFF
from ..curve import bezier
from ..curve import roots
from ..errors import DomainError
from .. import util

logger = logging.getLogger(__name__)

def _check_open(u, count):
    u = float(u)
    if not -ROUNDOFF <= u <= count + ROUNDOFF: # also rejects nan
        raise DomainError('Path parameter {} is outside the range [0, {}].'.format(u, count))
    return min(max(u, 0.0), float(count))

def distance(model, u1, u2, enhanced=False):
    """Signed arc length from path parameter u1 to u2.

    Parameters:
        model: path.lengths.LengthModel
        u1, u2: path parameters. For open paths both must lie in [0, n].
        enhanced: if True, measure partial segments by exact integration
            rather than with the sublength splines.

    Returns: the arc length, negative if u2 < u1.
    """
    count = model.segment_count
    closed = model.index.closed
    if closed:
        u1 = float(u1)
        u2 = float(u2)
        if not (math.isfinite(u1) and math.isfinite(u2)):
            raise DomainError('Path parameters must be finite.')
    else:
        u1 = _check_open(u1, count)
        u2 = _check_open(u2, count)
    if u1 == u2:
        return 0.0
    if u1 > u2:
        return -distance(model, u2, u1, enhanced)

    if closed:
        # shift both parameters by whole laps so that u1 is in [0, n)
        shift = math.floor(u1 / count) * count
        u1 -= shift
        u2 -= shift
    i1 = math.floor(u1)
    t1 = u1 - i1
    i2 = math.floor(u2)
    t2 = u2 - i2
    if i1 == i2:
        return model.partial(i1 % count, t1, t2, enhanced)

    terms = []
    first_whole = i1
    if t1 > 0:
        terms.append(model.partial(i1 % count, t1, 1.0, enhanced))
        first_whole = i1 + 1
    laps, whole = divmod(i2 - first_whole, count)
    cumulative = model.cumulative
    terms.append(laps * model.total)
    a = first_whole % count
    b = a + whole
    if b <= count:
        terms.append(cumulative[b] - cumulative[a])
    else:
        # wraps past the end of a closed path
        terms.append(cumulative[count] - cumulative[a])
        terms.append(cumulative[b - count])
    if t2 > 0:
        terms.append(model.partial(i2 % count, 0.0, t2, enhanced))
    return util.compensated_sum(terms)

def parameter_at(model, s, enhanced=False):
    """Path parameter u at which the arc length from u = 0 reaches s.

    Parameters:
        model: path.lengths.LengthModel
        s: arc length. Closed paths accept any value, measuring whole laps in
            either direction; open paths require s in [0, total length].
        enhanced: if True, refine the spline estimate with Newton's method
            against the exact arc length.

    Raises ConvergenceFailure if no inversion step finds a parameter.
    """
    s = float(s)
    if s == 0:
        return 0.0
    count = model.segment_count
    total = model.total
    if model.index.closed:
        if not math.isfinite(s) or total == 0:
            raise DomainError('Cannot find arc length {} on a closed path of length {}.'.format(s, total))
        laps = math.floor(s / total)
        base = laps * count
        s -= laps * total
        s = min(max(s, 0.0), total)
    else:
        if not 0 <= s <= total:
            raise DomainError('Arc length {} is outside the range [0, {}].'.format(s, total))
        base = 0

    cumulative = model.cumulative
    hit = int(numpy.searchsorted(cumulative, s, side='left'))
    if hit <= count and cumulative[hit] == s:
        # the start of the first segment at that arc length
        return float(base + hit)
    i = min(int(numpy.searchsorted(cumulative, s, side='right')) - 1, count - 1)
    return base + i + _invert_segment(model, i, s, enhanced)

def _invert_segment(model, i, s, enhanced):
    """Local parameter within segment i at which the path arc length is s."""
    segment = model.index.segments[i]
    start = model.cumulative[i]
    length = model.segment_lengths[i]
    if segment.degree == bezier.LINE:
        return min(max((s - start) / length, 0.0), 1.0)

    spline = model.sublength(i)
    knots = spline.knots
    intervals = len(knots) - 1

    def exact_error(t):
        return lengths.partial_length(segment, min(max(t, 0.0), 1.0)) - (s - start)

    def exact_speed(t):
        return float(segment.speeds(min(max(t, 0.0), 1.0)))

    def spline_error(t):
        return spline(t) - s

    def inverse_step():
        result = spline.invert(s)
        if not (result.converged and enhanced):
            return result
        j = min(int(result.root * intervals), intervals - 1)
        refined = roots.newton(exact_error, exact_speed, result.root, bracket=(knots[j], knots[j+1]))
        if refined.converged:
            return refined
        logger.debug('Newton refinement failed in segment %d at s=%r; keeping the spline estimate', i, s)
        return result

    def brent_step():
        logger.debug('Spline inversion failed in segment %d at s=%r; trying Brent\'s method', i, s)
        return roots.brent(spline_error, 0.0, 1.0)

    def snap_step():
        result = roots.snap_to_endpoint(spline_error, 0.0, 1.0)
        logger.warning('Could not invert arc length %r in segment %d; snapping to t=%g', s, i, result.root)
        return result

    return roots.first_converged(inverse_step, brent_step, snap_step).root
