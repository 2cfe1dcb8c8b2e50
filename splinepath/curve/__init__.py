'''
Curve
-----
Per-segment computations for Bezier path segments, and the numerical machinery they rely on.
 - curve.bezier: segment geometry; derivative, curvature and torsion formulas; Frenet frames.
 - curve.geometry: basic algorithms for points, vectors and polylines.
 - curve.quadrature: Gauss-Legendre tables used to integrate arc length (using numpy.polynomial).
 - curve.interpolate: Hermite splines mapping a segment's local parameter to arc length (using scipy.interpolate).
 - curve.roots: fallible root-finding steps used to invert arc length (using scipy.optimize).
 - curve.spline_geometry: sample points and frames equally spaced along a path.
 '''
