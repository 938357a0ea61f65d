"""
RRT (Rapidly-exploring Random Tree) primitives.

Sampling, goal testing and the single-step tree extension shared by every
planner variant. The extension is expressed as an Extender strategy so that
the cost-optimizing variants can swap in their own insertion rule while
reusing the same sample -> nearest -> steer -> collision-check cycle.
"""

from typing import Optional

import numpy as np

from ..core.environment import Environment
from ..core.node import Tree
from ..utils.geometry import Point, distance, steer

GOAL_SAMPLE_RATE = 0.1
GOAL_THRESHOLD = 0.5


class Sampler:
    """
    Goal-biased uniform sampler over the environment bounds.

    Attributes:
        environment (Environment): Supplies the sampling bounds
        goal (Point): Returned with probability goal_sample_rate
        rng (np.random.Generator): Source of all randomness for a run
    """

    def __init__(self,
                 environment: Environment,
                 goal: Point,
                 rng: np.random.Generator,
                 goal_sample_rate: float = GOAL_SAMPLE_RATE):
        self.environment = environment
        self.goal = goal
        self.rng = rng
        self.goal_sample_rate = goal_sample_rate

    def sample(self) -> Point:
        """
        Draw a random configuration.

        Returns:
            The goal with probability goal_sample_rate, otherwise a uniform
            point inside the bounds
        """
        if self.rng.random() < self.goal_sample_rate:
            return self.goal

        x_min, x_max, y_min, y_max = self.environment.bounds
        x = float(self.rng.uniform(x_min, x_max))
        y = float(self.rng.uniform(y_min, y_max))
        return (x, y)


def goal_reached(point: Point, goal: Point, threshold: float = GOAL_THRESHOLD) -> bool:
    """True if point is strictly closer than threshold to the goal."""
    return distance(point, goal) < threshold


class Extender:
    """
    Plain RRT extension strategy.

    A new configuration is attached to the nearest node found while
    steering, with no further optimization.

    Attributes:
        environment (Environment): Collision oracle
        step_size (float): Maximum edge length of one extension
    """

    def __init__(self, environment: Environment, step_size: float):
        self.environment = environment
        self.step_size = step_size

    def insert(self, tree: Tree, point: Point, nearest: int) -> int:
        """
        Insert a collision-free configuration into the tree.

        Args:
            tree: Tree to grow
            point: New configuration, already known to connect freely to nearest
            nearest: Index of the tree node the configuration was steered from

        Returns:
            Index of the inserted node
        """
        return tree.add(point, parent=nearest)

    def extend(self, tree: Tree, target: Point) -> Optional[int]:
        """
        Grow the tree by at most one node toward target.

        Args:
            tree: Tree to grow
            target: Sampled configuration to steer toward

        Returns:
            Index of the new node, or None if the steered edge collides
        """
        nearest = tree.nearest(target)
        new_point = steer(tree.position(nearest), target, self.step_size)

        if not self.environment.is_edge_collision_free(tree.position(nearest), new_point):
            return None

        return self.insert(tree, new_point, nearest)
