"""
Shared fixtures for the splinepath test suite.
"""

import math

import pytest

from splinepath.curve import bezier
from splinepath.path import commands

# control-point offset of the cubic Bezier that best approximates a quarter circle
QUARTER_CIRCLE_K = 4 / 3 * (math.sqrt(2) - 1)


def _quarter_circle(radius=1.0):
    k = QUARTER_CIRCLE_K * radius
    return [
        commands.move(radius, 0),
        commands.cubic(radius, k, k, radius, 0, radius),
    ]


@pytest.fixture
def line_commands():
    """Single straight segment of length 10 along the x axis."""
    return [commands.move(0, 0), commands.line(10, 0)]


@pytest.fixture
def triangle_commands():
    """Equilateral triangle with unit edges, closed without returning to the start."""
    return [
        commands.move(0, 0),
        commands.line(1, 0),
        commands.line(0.5, math.sqrt(3) / 2),
        commands.close(),
    ]


@pytest.fixture
def quarter_circle_commands():
    """Unit-radius quarter circle as a single cubic."""
    return _quarter_circle()


@pytest.fixture
def quarter_circle():
    """Factory for the commands of a quarter circle of a given radius."""
    return _quarter_circle


@pytest.fixture
def arc_segment():
    """Unit-radius quarter circle as a bare cubic segment."""
    k = QUARTER_CIRCLE_K
    return bezier.Segment([[1, 0], [1, k], [k, 1], [0, 1]])


@pytest.fixture
def mixed_commands():
    """Open 2D path with one segment of each kind."""
    return [
        commands.move(0, 0),
        commands.line(4, 0),
        commands.quad(6, 0, 6, 2),
        commands.cubic(6, 5, 2, 3, 1, 6),
    ]


@pytest.fixture
def space_curve_commands():
    """Open 3D path: a twisted cubic followed by a line."""
    return [
        commands.move(0, 0, 0),
        commands.cubic(1, 0, 0, 1, 1, 0, 1, 1, 1),
        commands.line(1, 1, 3),
    ]
