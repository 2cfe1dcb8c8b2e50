class PathError(Exception):
    """Base class for errors raised by splinepath."""


class StructuralError(PathError, ValueError):
    """The drawing-command stream does not describe a valid path: it does not
    start with a move, has drawing commands after a close, is empty, or has
    malformed coordinates. Raised while building a path; never retried."""


class DomainError(PathError, ValueError):
    """A path parameter or arc length lies outside the valid range of an open
    path, or a 3D-only quantity was requested for a 2D path."""


class ConvergenceFailure(PathError, ArithmeticError):
    """Every step used to invert arc length failed to produce a root."""


class StaleHandleError(PathError, RuntimeError):
    """A Location was used after the path it came from was rebuilt."""
