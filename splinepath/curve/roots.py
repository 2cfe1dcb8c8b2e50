"""Fallible root-finding steps.

Each step returns a RootResult rather than raising: a step that does not find
a root reports converged=False and the caller moves on to the next one. Use
first_converged() to run a sequence of steps in order.

Example:
    result = first_converged(
        lambda: newton(f, df, 0.5, bracket=(0, 1)),
        lambda: brent(f, 0, 1),
        lambda: snap_to_endpoint(f, 0, 1))
"""

import collections
import math
import warnings

from scipy import optimize

from ..errors import ConvergenceFailure

RootResult = collections.namedtuple('RootResult', ('root', 'converged', 'method'))

NEWTON_ITERATIONS = 50
BRENT_ITERATIONS = 100

def failed(method):
    return RootResult(math.nan, False, method)

def newton(function, derivative, x0, bracket=None, tol=1e-12, maxiter=NEWTON_ITERATIONS):
    """Find a root of function with Newton's method, starting from x0.

    Parameters:
        function, derivative: scalar callables.
        x0: initial guess.
        bracket: optional (lo, hi) pair. A root outside the bracket is
            reported as a failure.
        tol, maxiter: convergence tolerance and iteration limit.
    """
    with warnings.catch_warnings():
        # a zero derivative is reported through info.converged
        warnings.simplefilter('ignore', RuntimeWarning)
        root, info = optimize.newton(function, x0, fprime=derivative, tol=tol,
            maxiter=maxiter, full_output=True, disp=False)
    root = float(root)
    if not info.converged or not math.isfinite(root):
        return failed('newton')
    if bracket is not None and not bracket[0] <= root <= bracket[1]:
        return failed('newton')
    return RootResult(root, True, 'newton')

def brent(function, lo, hi, xtol=1e-14, maxiter=BRENT_ITERATIONS):
    """Find a root of function in [lo, hi] with Brent's method. Fails if the
    function does not change sign over the interval."""
    f_lo = function(lo)
    f_hi = function(hi)
    if f_lo == 0:
        return RootResult(float(lo), True, 'brent')
    if f_hi == 0:
        return RootResult(float(hi), True, 'brent')
    if not f_lo * f_hi < 0: # same sign, or nan
        return failed('brent')
    root, info = optimize.brentq(function, lo, hi, xtol=xtol, maxiter=maxiter,
        full_output=True, disp=False)
    return RootResult(float(root), bool(info.converged), 'brent')

def snap_to_endpoint(function, lo, hi):
    """Return whichever of lo and hi has the function value closer to zero."""
    f_lo = abs(function(lo))
    f_hi = abs(function(hi))
    if math.isnan(f_lo) and math.isnan(f_hi):
        return failed('snap')
    if math.isnan(f_hi) or f_lo <= f_hi:
        return RootResult(float(lo), True, 'snap')
    return RootResult(float(hi), True, 'snap')

def first_converged(*steps):
    """Call each of steps (zero-argument callables returning RootResult) in
    turn and return the first converged result.

    Raises ConvergenceFailure if none converges."""
    tried = []
    for step in steps:
        result = step()
        if result.converged:
            return result
        tried.append(result.method)
    raise ConvergenceFailure('No root found (tried: {}).'.format(', '.join(tried)))
