"""Map path parameters to segments, and cursors that cache the mapping.

The path parameter u of a path with n segments runs from 0 to n: segment i
covers [i, i+1], with local parameter t = u - i. For closed paths u may take
any value, and wraps around modulo n.
"""

import math

from ..curve import bezier
from ..errors import DomainError, StaleHandleError

ROUNDOFF = 1e-10

def decompose(u, count, closed):
    """Split a path parameter into (segment index, local parameter t).

    Parameters:
        u: path parameter.
        count: number of segments in the path.
        closed: whether the path is closed.

    Values of u within ROUNDOFF of the ends of an open path are accepted;
    otherwise an open path raises DomainError for u outside [0, count].
    The end of an open path, u == count, maps to (count-1, 1.0).
    """
    u = float(u)
    if not math.isfinite(u):
        raise DomainError('Path parameter {} is not finite.'.format(u))
    index = math.floor(u)
    t = u - index
    if closed:
        index %= count
    elif index == -1 and t > 1 - ROUNDOFF:
        return 0, 0.0
    elif index < 0 or index > count:
        raise DomainError('Path parameter {} is outside the range [0, {}].'.format(u, count))
    elif index == count:
        if t > ROUNDOFF:
            raise DomainError('Path parameter {} is outside the range [0, {}].'.format(u, count))
        return count - 1, 1.0
    return index, min(max(t, 0.0), 1.0)


class Location:
    """A point on a path, found once by path parameter and then queried for
    its geometry without repeating the segment lookup.

    A Location belongs to the snapshot of the path it was made from: once the
    path has been refreshed or invalidated, every query raises
    StaleHandleError.
    """
    def __init__(self, path, snapshot, u):
        self._path = path
        self._snapshot = snapshot
        self.path_parameter = float(u)
        self.segment_index, t = decompose(u, snapshot.segment_count, snapshot.closed)
        self.evaluator = snapshot.index.evaluators[self.segment_index]
        self.local_params = bezier.LocalParams(t)

    def __repr__(self):
        return 'Location(u={}, segment={}, t={})'.format(self.path_parameter, self.segment_index, self.local_parameter)

    @property
    def local_parameter(self):
        return self.local_params.t

    @property
    def segment(self):
        return self.evaluator.segment

    def is_stale(self):
        return self._path.version != self._snapshot.version

    def _evaluator(self):
        if self.is_stale():
            raise StaleHandleError('Location at u={} refers to an outdated version of the path.'.format(self.path_parameter))
        return self.evaluator

    def position(self):
        return self._evaluator().position(self.local_params)

    def velocity(self):
        return self._evaluator().velocity(self.local_params)

    def acceleration(self):
        return self._evaluator().acceleration(self.local_params)

    def jerk(self):
        return self._evaluator().jerk(self.local_params)

    def ds_du(self):
        return self._evaluator().ds_dt(self.local_params)

    def d2s_du2(self):
        return self._evaluator().d2s_dt2(self.local_params)

    def curvature(self):
        return self._evaluator().curvature(self.local_params)

    def curvature_exists(self):
        return self._evaluator().curvature_exists(self.local_params)

    def torsion(self):
        return self._evaluator().torsion(self.local_params)

    def tangent(self):
        return self._evaluator().tangent(self.local_params)

    def tangent_exists(self):
        return self._evaluator().tangent_exists(self.local_params)

    def normal(self):
        return self._evaluator().normal(self.local_params)

    def normal_exists(self):
        return self._evaluator().normal_exists(self.local_params)

    def binormal(self):
        return self._evaluator().binormal(self.local_params)

    def binormal_exists(self):
        return self._evaluator().binormal_exists(self.local_params)

    def distance_from_start(self):
        """Signed arc length from u = 0 to this location."""
        self._evaluator()
        return self._snapshot.distance(0, self.path_parameter, self._path.enhanced_accuracy)
