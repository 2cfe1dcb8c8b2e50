import numpy

def cumulative_distances(points, unit=True):
    """Return cumulative distances along a polyline.

    Parameters:
    points: array of shape (n,m) consisting of n points in m dimensions
    unit: if True, return distances divided by total length of the curve,
          if False, return actual arc lengths."""
    points = numpy.asarray(points, dtype=float)
    distances = numpy.concatenate([[0], numpy.add.accumulate(numpy.sqrt(((points[:-1] - points[1:])**2).sum(axis=1)))])
    if unit:
        distances /= distances[-1]
    return distances

def polyline_length(points):
    """Return the total length of the polyline through the given points."""
    return float(cumulative_distances(points, unit=False)[-1])

def norm(vector):
    """Euclidean length of a vector."""
    return numpy.sqrt(numpy.dot(vector, vector))

def cross(v1, v2):
    """Cross product of two 3d vectors, or the z-component of the cross
    product of two 2d vectors (a scalar)."""
    if len(v1) == 2:
        return v1[0]*v2[1] - v1[1]*v2[0]
    return numpy.array([
        v1[1]*v2[2] - v1[2]*v2[1],
        v1[2]*v2[0] - v1[0]*v2[2],
        v1[0]*v2[1] - v1[1]*v2[0]])

def find_perp(vector, unit=True):
    """Return a 2d vector perpendicular to the given one, rotated 90 degrees
    counterclockwise (i.e. from the positive x axis toward the positive y axis),
    optionally of unit length."""
    perp = numpy.array([-vector[1], vector[0]], dtype=float)
    if unit:
        perp /= norm(perp)
    return perp

def distances_to_line_segment(points, line_start, line_end):
    """Given a set of points and a single line segment (specified by its
    starting and ending points), return the distance from each point to the
    closest point on that segment.

    Parameters:
    points: array of shape (n,m) consisting of n points in m dimensions
    line_start, line_end: arrays of shape (m)

    Returns: array of shape (n)"""
    points = numpy.asarray(points, dtype=float)
    v = line_end - line_start
    w = points - line_start
    c2 = (v*v).sum()
    if c2 == 0:
        # degenerate line: distance to the single point
        return numpy.sqrt((w**2).sum(axis=1))
    fractional_positions = ((w*v).sum(axis=1) / c2).clip(0, 1)
    closest_points = line_start + fractional_positions[:,numpy.newaxis]*v
    return numpy.sqrt(((points - closest_points)**2).sum(axis=1))

def coincident(p0, p1):
    """Return True if two points are equal to within the single-precision
    spacing of the larger magnitude along each axis.

    This is the tolerance used to decide whether a path that is being closed
    already ends at its starting point."""
    p0 = numpy.asarray(p0, dtype=float)
    p1 = numpy.asarray(p1, dtype=float)
    scale = numpy.maximum(numpy.absolute(p0), numpy.absolute(p1)).astype(numpy.float32)
    tolerance = numpy.spacing(scale).astype(float)
    return bool(numpy.all(numpy.absolute(p0 - p1) <= tolerance))
