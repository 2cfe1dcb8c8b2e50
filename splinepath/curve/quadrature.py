"""Gauss-Legendre quadrature on the unit interval.

Arc length is the integral of the speed ds/dt over a segment's local
parameter; this module supplies the nodes and weights to compute it. Two
kinds of rule are used: a single high-order rule over all of [0, 1] (see
integrate()), and an IntervalTable that splits [0, 1] into equal intervals
and applies a lower-order rule within each, giving the integral over each
interval at once. The latter supplies the knot values of the sublength
splines (see curve.interpolate).

Tables are immutable and shared: interval_table(n) always returns the same
object for the same n. A process-wide default number of intervals can be set
with set_default_intervals().
"""

import functools
import logging
import threading

import numpy

logger = logging.getLogger(__name__)

DEFAULT_INTERVALS = 64
MIN_INTERVALS = 5
SEGMENT_ORDER = 32
INTERVAL_ORDER = 16

@functools.lru_cache(maxsize=None)
def gauss_legendre(order):
    """Return (nodes, weights) of the Gauss-Legendre rule of the given order,
    mapped from [-1, 1] onto [0, 1]. The arrays are read-only."""
    nodes, weights = numpy.polynomial.legendre.leggauss(order)
    nodes = (nodes + 1) / 2
    weights = weights / 2
    nodes.flags.writeable = False
    weights.flags.writeable = False
    return nodes, weights

def integrate(function, order=SEGMENT_ORDER):
    """Integrate a function over [0, 1].

    Parameters:
        function: callable that takes an array of parameter values and returns
            an array of function values of the same shape.
        order: number of quadrature points.
    """
    nodes, weights = gauss_legendre(order)
    return float(numpy.dot(weights, function(nodes)))


class IntervalTable:
    """Quadrature nodes and weights for [0, 1] split into equal intervals.

    Attributes:
        intervals: number of intervals.
        knots: array of shape (intervals+1,) of interval boundaries.
        nodes: array of shape (intervals, order): the quadrature nodes within
            each interval.
        weights: array of shape (order,): the weights, scaled to the
            interval width.
    """
    def __init__(self, intervals, order=INTERVAL_ORDER):
        if intervals < MIN_INTERVALS:
            raise ValueError('At least {} intervals are required.'.format(MIN_INTERVALS))
        base_nodes, base_weights = gauss_legendre(order)
        width = 1 / intervals
        knots = numpy.linspace(0, 1, intervals + 1)
        nodes = knots[:-1, numpy.newaxis] + width * base_nodes
        weights = width * base_weights
        for array in (knots, nodes, weights):
            array.flags.writeable = False
        self.intervals = intervals
        self.order = order
        self.knots = knots
        self.nodes = nodes
        self.weights = weights

    def __repr__(self):
        return 'IntervalTable({}, order={})'.format(self.intervals, self.order)

    def integrate(self, function):
        """Return the integral of function over each interval, as an array of
        shape (intervals,). function is called once, with all nodes."""
        values = numpy.asarray(function(self.nodes.ravel()), dtype=float)
        return values.reshape(self.nodes.shape) @ self.weights

@functools.lru_cache(maxsize=32)
def interval_table(intervals):
    """Return the shared IntervalTable with the given number of intervals."""
    return IntervalTable(intervals)


_default_lock = threading.Lock()
_default_table = None

def set_default_intervals(intervals):
    """Set the number of intervals used by paths that do not specify one.

    Parameters:
        intervals: integer of at least MIN_INTERVALS, or None to restore
            DEFAULT_INTERVALS.

    Paths already built keep the table they were built with.
    """
    global _default_table
    if intervals is None:
        intervals = DEFAULT_INTERVALS
    table = interval_table(int(intervals))
    with _default_lock:
        _default_table = table
    logger.debug('Default interval count set to %d', table.intervals)

def default_table():
    global _default_table
    with _default_lock:
        if _default_table is None:
            _default_table = interval_table(DEFAULT_INTERVALS)
        return _default_table

def default_intervals():
    """Return the number of intervals used by paths that do not specify one."""
    return default_table().intervals

def resolve_intervals(intervals):
    """Return a validated interval count: None or 0 select the default;
    otherwise the value must be an integer of at least MIN_INTERVALS."""
    if intervals is None or intervals == 0:
        return default_intervals()
    if int(intervals) != intervals or intervals < MIN_INTERVALS:
        raise ValueError('Interval count must be an integer of at least {}, or 0 for the default.'.format(MIN_INTERVALS))
    return int(intervals)
