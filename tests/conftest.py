"""Shared fixtures for the planner tests."""
import matplotlib

matplotlib.use('Agg')

import pytest

from rrt_planning.core.environment import Environment, Obstacle


@pytest.fixture
def open_field():
    """Obstacle-free 12 x 10 field around the segment (0, 0) -> (10, 0)."""
    return Environment((-1.0, 11.0, -5.0, 5.0))


@pytest.fixture
def wall_env():
    """20 x 20 field with a wall that leaves a gap only at the top."""
    return Environment((0.0, 20.0, 0.0, 20.0), [Obstacle(9.0, 0.0, 2.0, 14.0)])


@pytest.fixture
def enclosed_goal_env():
    """Goal at (8, 8) inside a closed room of 0.5-thick walls."""
    walls = [
        Obstacle(6.0, 6.0, 4.0, 0.5),
        Obstacle(6.0, 9.5, 4.0, 0.5),
        Obstacle(6.0, 6.0, 0.5, 4.0),
        Obstacle(9.5, 6.0, 0.5, 4.0),
    ]
    return Environment((0.0, 12.0, 0.0, 12.0), walls)
