"""
RRT Planning - Sampling-based motion planning in 2D

RRT, RRT*, RRT-Connect, RRT*-Connect and RRT-Connect with path shortcutting,
planning around axis-aligned rectangular obstacles.

Modules:
    core.environment: Obstacles, bounds and the segment collision oracle
    core.node: Arena trees with parent indices and cost propagation
    core.path_planner: Planner base class with path validation and I/O
    algorithms: Planner primitives, variant selector and SamplingPlanner
    utils: Geometry, YAML configuration and matplotlib visualization
"""

from .algorithms.planner import SamplingPlanner, create_planner
from .algorithms.shortcut import shortcut_path
from .algorithms.variants import Variant
from .core.environment import Environment, Obstacle

__version__ = "1.0.0"

__all__ = [
    'Environment',
    'Obstacle',
    'SamplingPlanner',
    'Variant',
    'create_planner',
    'shortcut_path',
]
