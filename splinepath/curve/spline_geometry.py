"""Sample a SplinePath at many points at once.

Each function takes a path.spline_path.SplinePath. Where num_points is None,
a number of points is guessed from the size of the path: 16 per segment, and
at least 100.
"""

import numpy

from . import geometry

def _default_num_points(path):
    return max(100, path.segment_count() * 16)

def get_parameters(path, num_points=None):
    """Return the path parameters of num_points points equally spaced in
    arc length from the start to the end of the path (for a closed path, the
    last point coincides with the first)."""
    if num_points is None:
        num_points = _default_num_points(path)
    distances = numpy.linspace(0, path.path_length(), num_points)
    return numpy.array([path.u(s) for s in distances])

def get_points(path, num_points=None):
    """Evaluate a path at a given number of points, equally spaced in arc length.

    Parameters:
        path: SplinePath
        num_points: number of points to return, or None to guess a good
            number of points.

    Returns: array of shape (num_points, d), where d is the dimension of the path.
    """
    return numpy.array([path.position(u) for u in get_parameters(path, num_points)])

def get_frames(path, num_points=None):
    """Return points equally spaced in arc length along a path, with the
    unit tangent and normal vectors there.

    Returns: points, tangents, normals: arrays of shape (num_points, d).
        Where a tangent or normal does not exist, the vector is zero.
    """
    locations = [path.get_location(u) for u in get_parameters(path, num_points)]
    points = numpy.array([location.position() for location in locations])
    tangents = numpy.array([location.tangent() for location in locations])
    normals = numpy.array([location.normal() for location in locations])
    return points, tangents, normals

def polyline_length(path, num_points=None):
    """Approximate the arc-length of a path by evaluating it at num_points
    positions equally spaced in path parameter and calculating the length of
    the resulting polyline. Always slightly less than the true length, and
    independent of the length model, so useful as a cross-check."""
    if num_points is None:
        num_points = _default_num_points(path)
    parameters = numpy.linspace(0, path.max_parameter(), num_points)
    points = numpy.array([path.position(u) for u in parameters])
    return geometry.polyline_length(points)

def rmsd(path1, path2, num_points=None):
    """Calculate the root mean squared distance between two paths evaluated
    at a given number of points, equally spaced in arc length along each.

    If num_points is None, try to guess a sane default.
    """
    if num_points is None:
        num_points = max(_default_num_points(path1), _default_num_points(path2))
    p1 = get_points(path1, num_points)
    p2 = get_points(path2, num_points)
    squared_distances = ((p1 - p2)**2).sum(axis=1)
    return numpy.sqrt(numpy.mean(squared_distances))

def centroid_distance(path1, path2, num_points=None):
    """Calculate the distance between the centroids of two paths evaluated
    at a given number of points.

    If num_points is None, try to guess a sane default.
    """
    c1 = get_points(path1, num_points).mean(axis=0)
    c2 = get_points(path2, num_points).mean(axis=0)
    return numpy.linalg.norm(c1 - c2)
