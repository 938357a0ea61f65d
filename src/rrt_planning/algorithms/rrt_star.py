"""
RRT* (Rapidly-exploring Random Tree Star) primitives.

RRT* improves on RRT by choosing the cheapest parent among nearby nodes for
every new configuration and then rewiring those neighbors through the new
node whenever that lowers their cost from the root.
"""

import math
from typing import List, Optional

from ..core.environment import Environment
from ..core.node import Tree
from ..utils.geometry import Point, distance
from .rrt import Extender


def find_near_nodes(tree: Tree, point: Point, radius: float) -> List[int]:
    """
    Find all nodes within radius of a candidate configuration.

    Args:
        tree: Tree to search
        point: Candidate configuration
        radius: Euclidean search radius (inclusive)

    Returns:
        Node indices in insertion order
    """
    return tree.near(point, radius)


def choose_parent(tree: Tree,
                  environment: Environment,
                  point: Point,
                  near_nodes: List[int]) -> Optional[int]:
    """
    Choose the parent that minimizes the cost of reaching point.

    Only near nodes with a collision-free edge to point are eligible. On
    equal cost the earliest inserted node wins.

    Args:
        tree: Tree containing the candidates
        environment: Collision oracle
        point: Configuration to find a parent for
        near_nodes: Candidate parent indices

    Returns:
        Index of the best parent, or None if no candidate qualifies
    """
    best_parent = None
    min_cost = math.inf

    for index in near_nodes:
        cost = tree[index].cost + distance(tree.position(index), point)
        if cost < min_cost and environment.is_edge_collision_free(tree.position(index), point):
            min_cost = cost
            best_parent = index

    return best_parent


def rewire(tree: Tree,
           environment: Environment,
           new_index: int,
           near_nodes: List[int]) -> List[int]:
    """
    Rewire the tree by checking if paths through the new node are cheaper.

    Each near node whose cost strictly decreases by going through the new
    node (over a collision-free edge) is re-parented, and the new costs are
    pushed down its whole subtree.

    Args:
        tree: Tree to rewire
        environment: Collision oracle
        new_index: Index of the newly inserted node
        near_nodes: Indices of candidate nodes

    Returns:
        Indices of the nodes that were re-parented
    """
    new_node = tree[new_index]
    rewired = []

    for index in near_nodes:
        if index == new_index or index == new_node.parent:
            continue

        near_node = tree[index]
        new_cost = new_node.cost + distance(new_node.position, near_node.position)

        if new_cost < near_node.cost and environment.is_edge_collision_free(
                new_node.position, near_node.position):
            tree.reparent(index, new_index)
            rewired.append(index)

    return rewired


class OptimizingExtender(Extender):
    """
    RRT* extension strategy: near set, parent selection, then rewire.

    Attributes:
        search_radius (float): Radius of the near-set query
    """

    def __init__(self, environment: Environment, step_size: float, search_radius: float):
        super().__init__(environment, step_size)
        self.search_radius = search_radius

    def insert(self, tree: Tree, point: Point, nearest: int) -> int:
        """
        Insert a configuration with the cheapest collision-free parent.

        Falls back to `nearest` (whose edge is already known to be free)
        when no near node qualifies, then rewires the neighborhood.
        """
        near_nodes = find_near_nodes(tree, point, self.search_radius)

        parent = choose_parent(tree, self.environment, point, near_nodes)
        if parent is None:
            parent = nearest

        new_index = tree.add(point, parent=parent)
        rewire(tree, self.environment, new_index, near_nodes)
        return new_index
