"""Turn a stream of drawing commands into an indexed array of segments.

Segment i covers path parameters u in [i, i+1]. A closed path whose drawing
commands do not already return to the starting point gets an extra straight
segment, the closing edge, from the last point back to the start.
"""

import collections

from . import commands
from .commands import OP
from ..curve import bezier
from ..curve import geometry
from ..errors import StructuralError

PathIndex = collections.namedtuple('PathIndex',
    ('segments', 'evaluators', 'closed', 'dimensions', 'start', 'synthesized_close'))
PathIndex.__doc__ = """Immutable result of build_index().

    segments: tuple of curve.bezier.Segment, in path order.
    evaluators: tuple of curve.bezier.SegmentEvaluator, one per segment.
    closed: True if the command stream ended with a close.
    dimensions: 2 or 3.
    start: the starting point of the path.
    synthesized_close: True if a closing edge was appended to the drawn segments.
"""

def build_index(command_stream):
    """Validate a stream of (op, coords) commands and build a PathIndex.

    The first command must be a move, which also fixes the dimension of the
    path. Further moves before any drawing command replace the starting point.
    Raises StructuralError if the stream is empty or malformed, draws after a
    close, or moves after drawing has begun.
    """
    dimensions = None
    start = current = None
    segments = []
    closed = False
    for command in command_stream:
        op, coords = commands.split(command)
        if dimensions is None:
            if op != OP.MOVE:
                raise StructuralError('A path must begin with a move, not {!r}.'.format(op))
            if len(coords) not in (2, 3):
                raise StructuralError('The first move must have 2 or 3 coordinates, not {}.'.format(len(coords)))
            dimensions = len(coords)
        if closed:
            raise StructuralError('Command {!r} follows the close of the path.'.format(op))
        points = commands.to_points(op, coords, dimensions)
        if op == OP.MOVE:
            if segments:
                raise StructuralError('A move after drawing has begun would start a second subpath.')
            start = current = points[0]
        elif op == OP.CLOSE:
            closed = True
        else:
            segments.append(bezier.Segment([current, *points]))
            current = points[-1]
    if not segments:
        raise StructuralError('The path has no drawing commands.')

    synthesized_close = False
    closing = None
    if closed:
        if not geometry.coincident(current, start):
            segments.append(bezier.Segment.line(current, start))
            synthesized_close = True
            closing = len(segments) - 1
        elif segments[-1].degree == bezier.LINE and segments[-1].is_degenerate():
            # an explicit zero-length line back to the start acts as the closing edge
            closing = len(segments) - 1

    evaluators = []
    for i, segment in enumerate(segments):
        closing_edge = None
        if i == closing:
            closing_edge = bezier.ClosingEdge(evaluators[-1] if evaluators else None)
        evaluators.append(bezier.SegmentEvaluator(segment, closing_edge))
    return PathIndex(tuple(segments), tuple(evaluators), closed, dimensions, start.copy(), synthesized_close)
