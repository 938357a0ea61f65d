"""
RRT-Connect primitives.

RRT-Connect grows one tree from the start and one from the goal. After each
extension of one tree, the other tree greedily steps toward the new node
until it either reaches it or hits an obstacle.
"""

import logging
from typing import List, Optional

from ..core.environment import Environment
from ..core.node import Tree
from ..utils.geometry import Point, distance, steer

logger = logging.getLogger(__name__)

# A connect step landing this fraction of a step size from the target counts as reached
CONNECT_TOLERANCE = 0.5


def connect_tree(tree: Tree,
                 environment: Environment,
                 target: Point,
                 step_size: float) -> Optional[int]:
    """
    Greedily grow a tree toward a fixed target.

    Each round finds the node nearest the target. Within one step size, a
    direct edge to the target itself is attempted and ends the loop either
    way. Otherwise one steer step is taken; landing within half a step size
    of the target counts as connected. Every node created carries
    parent.cost + edge length; no rewiring is done here.

    The half-step tolerance means a successful connection may stop short of
    the target by up to step_size / 2. That gap is only accepted when the
    junction edge to the target is itself collision-free.

    Args:
        tree: Tree to grow
        environment: Collision oracle
        target: Configuration to reach (a node of the other tree)
        step_size: Maximum edge length

    Returns:
        Index of the connecting node, or None if an obstacle blocks the way
    """
    while True:
        nearest = tree.nearest(target)
        nearest_point = tree.position(nearest)

        # Target already in the tree
        if nearest_point == target:
            return nearest

        if distance(nearest_point, target) < step_size:
            if environment.is_edge_collision_free(nearest_point, target):
                return tree.add(target, parent=nearest)
            logger.debug("Connect blocked at final edge toward %s", target)
            return None

        new_point = steer(nearest_point, target, step_size)
        if not environment.is_edge_collision_free(nearest_point, new_point):
            logger.debug("Connect blocked after reaching %s", nearest_point)
            return None

        new_index = tree.add(new_point, parent=nearest)

        if distance(new_point, target) < step_size * CONNECT_TOLERANCE:
            if environment.is_edge_collision_free(new_point, target):
                return new_index
            return None


def extract_dual_path(start_tree: Tree,
                      start_connection: int,
                      goal_tree: Tree,
                      goal_connection: int) -> List[Point]:
    """
    Stitch the two half paths into one start-to-goal path.

    The start tree's chain is reversed (start -> junction); the goal tree's
    chain is already ordered junction -> goal because its root is the goal.
    The goal-side connection node is dropped when it coincides with the
    start-side one, otherwise both are kept so the junction gap appears as
    an explicit segment.

    Args:
        start_tree: Tree rooted at the start
        start_connection: Connection node index in start_tree
        goal_tree: Tree rooted at the goal
        goal_connection: Connection node index in goal_tree

    Returns:
        Waypoints from start to goal
    """
    path = start_tree.path_to_root(start_connection)[::-1]
    goal_side = goal_tree.path_to_root(goal_connection)

    if goal_side[0] == path[-1]:
        goal_side = goal_side[1:]

    return path + goal_side
