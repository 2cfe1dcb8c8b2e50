"""Drawing commands that describe a path.

A path is given as an iterable of (op, coords) pairs, where op is one of the
OP constants and coords is a flat sequence of coordinates: one point for
'move' and 'line', two for 'quad' (control point, end point), three for
'cubic' (two control points, end point), and none for 'close'. The number of
coordinates per point (2 or 3) is set by the first move.

The helper functions build such pairs:
    commands = [move(0, 0), line(10, 0), quad(15, 0, 15, 5), close()]
"""

import numpy

from ..errors import StructuralError

class OP:
    MOVE = 'move'
    LINE = 'line'
    QUAD = 'quad'
    CUBIC = 'cubic'
    CLOSE = 'close'

# number of points that follow each op
POINT_COUNTS = {OP.MOVE: 1, OP.LINE: 1, OP.QUAD: 2, OP.CUBIC: 3, OP.CLOSE: 0}

def move(*coords):
    return OP.MOVE, coords

def line(*coords):
    return OP.LINE, coords

def quad(*coords):
    return OP.QUAD, coords

def cubic(*coords):
    return OP.CUBIC, coords

def close():
    return OP.CLOSE, ()

def split(command):
    """Return (op, coords) from a command, with op validated and coords as a
    flat float array. A bare op (or a 1-tuple) is accepted for 'close'."""
    if isinstance(command, str):
        op, coords = command, ()
    elif len(command) == 1:
        op, coords = command[0], ()
    else:
        op, coords = command
    op = str(op).lower()
    if op not in POINT_COUNTS:
        raise StructuralError('Unknown drawing command {!r}.'.format(op))
    try:
        coords = numpy.asarray(coords, dtype=float).ravel()
    except (TypeError, ValueError) as e:
        raise StructuralError('Command {!r} has malformed coordinates.'.format(op)) from e
    if not numpy.isfinite(coords).all():
        raise StructuralError('Command {!r} has non-finite coordinates.'.format(op))
    return op, coords

def to_points(op, coords, dimensions):
    """Reshape the flat coords of a command into an array of shape
    (n, dimensions), checking that there are as many as the op needs."""
    expected = POINT_COUNTS[op] * dimensions
    if len(coords) != expected:
        raise StructuralError('Command {!r} needs {} coordinates for a {}D path, not {}.'.format(op, expected, dimensions, len(coords)))
    return coords.reshape(-1, dimensions)
