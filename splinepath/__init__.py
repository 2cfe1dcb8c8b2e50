'''
# splinepath

Parametric path engine: continuous paths made of straight, quadratic and cubic
Bezier segments in 2 or 3 dimensions, with queries that map between the path
parameter, arc length, and the differential geometry of the path (position,
tangent, normal, binormal, curvature, torsion).

Curve
-----
Per-segment computations and the numerical machinery they rely on.
 - curve.bezier: segment geometry and derivative, curvature and torsion formulas.
 - curve.geometry: small vector helpers for points and polylines.
 - curve.quadrature: Gauss-Legendre tables used to integrate arc length.
 - curve.interpolate: Hermite splines mapping a segment's local parameter to arc length (using scipy.interpolate).
 - curve.roots: fallible root-finding steps used to invert arc length (using scipy.optimize).
 - curve.spline_geometry: sample points and frames equally spaced along a path.

Path
----
Whole-path bookkeeping on top of the per-segment machinery.
 - path.commands: the move/line/quad/cubic/close drawing-command vocabulary.
 - path.index: validate a command stream and turn it into an array of segments.
 - path.lengths: segment lengths, cumulative lengths, and cached sublength splines.
 - path.distance: arc length between path parameters, and its inverse.
 - path.location: map a path parameter to a segment, and cache that mapping.
 - path.spline_path: the SplinePath class tying all of the above together.

'''

import logging

from .errors import PathError, StructuralError, DomainError, ConvergenceFailure, StaleHandleError
from .path.commands import OP
from .path.spline_path import SplinePath

logging.getLogger(__name__).addHandler(logging.NullHandler())
