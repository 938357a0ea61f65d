"""
Node and tree structures for sampling-based path planning.

Trees are stored as a flat arena: every node lives at a fixed index and refers
to its parent by index, so re-parenting during rewire is an index update and
subtree walks never recurse.
"""

from typing import Iterator, List, Optional

import numpy as np

from ..utils.geometry import Point, distance


class Node:
    """
    Represents a node in a search tree.

    Attributes:
        x (float): X-coordinate
        y (float): Y-coordinate
        parent (Optional[int]): Index of the parent node (None for the root)
        cost (float): Accumulated edge length from the root to this node
    """

    __slots__ = ('x', 'y', 'parent', 'cost')

    def __init__(self, x: float, y: float, parent: Optional[int] = None, cost: float = 0.0):
        self.x = x
        self.y = y
        self.parent = parent
        self.cost = cost

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def __repr__(self) -> str:
        """String representation of the node."""
        return f"Node({self.x:.2f}, {self.y:.2f}, parent={self.parent}, cost={self.cost:.2f})"


class Tree:
    """
    Insertion-ordered arena of nodes rooted at a single configuration.

    Positions are mirrored into a NumPy array so nearest-neighbor and
    near-set queries are vectorized. Nodes are never removed and never move;
    only their parent and cost change, through reparent().

    Attributes:
        nodes (List[Node]): All nodes, index 0 is the root
        children (List[List[int]]): Child indices of each node
    """

    _INITIAL_CAPACITY = 64

    def __init__(self, root: Point):
        """
        Create a tree containing only its root.

        Args:
            root: Position of the root node (start or goal)
        """
        self.nodes: List[Node] = []
        self.children: List[List[int]] = []
        self._points = np.empty((self._INITIAL_CAPACITY, 2), dtype=float)
        self.add(root)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def position(self, index: int) -> Point:
        """Position of the node at index."""
        return self.nodes[index].position

    def add(self, point: Point, parent: Optional[int] = None) -> int:
        """
        Append a node and return its index.

        The cost is derived from the parent: parent.cost + edge length.

        Args:
            point: Position of the new node
            parent: Index of the parent node, None only for the root
        """
        index = len(self.nodes)
        if index == len(self._points):
            grown = np.empty((2 * len(self._points), 2), dtype=float)
            grown[:index] = self._points
            self._points = grown

        x, y = float(point[0]), float(point[1])
        cost = 0.0
        if parent is not None:
            parent_node = self.nodes[parent]
            cost = parent_node.cost + distance(parent_node.position, (x, y))
            self.children[parent].append(index)

        self.nodes.append(Node(x, y, parent, cost))
        self.children.append([])
        self._points[index] = (x, y)
        return index

    def nearest(self, point: Point) -> int:
        """
        Index of the node closest to point.

        Uses squared Euclidean distance; ties resolve to the earliest
        inserted node.
        """
        diff = self._points[:len(self.nodes)] - point
        return int(np.argmin(np.einsum('ij,ij->i', diff, diff)))

    def near(self, point: Point, radius: float) -> List[int]:
        """Indices of all nodes within radius of point, in insertion order."""
        diff = self._points[:len(self.nodes)] - point
        dist_sq = np.einsum('ij,ij->i', diff, diff)
        return [int(i) for i in np.flatnonzero(dist_sq <= radius * radius)]

    def reparent(self, index: int, new_parent: int) -> None:
        """
        Attach node `index` to `new_parent` and refresh the subtree's costs.

        The caller guarantees new_parent is not a descendant of index.
        Costs are propagated with an explicit worklist over exactly the
        subtree rooted at index.
        """
        node = self.nodes[index]
        if node.parent is not None:
            self.children[node.parent].remove(index)
        node.parent = new_parent
        self.children[new_parent].append(index)

        stack = [index]
        while stack:
            current = stack.pop()
            current_node = self.nodes[current]
            parent_node = self.nodes[current_node.parent]
            current_node.cost = parent_node.cost + distance(parent_node.position,
                                                            current_node.position)
            stack.extend(self.children[current])

    def path_to_root(self, index: int) -> List[Point]:
        """
        Positions from node `index` back to the root (inclusive).

        Walks at most len(tree) parent links.
        """
        path = []
        current: Optional[int] = index
        while current is not None:
            node = self.nodes[current]
            path.append(node.position)
            current = node.parent
        return path

    def depth(self, index: int) -> int:
        """Number of parent links between node `index` and the root."""
        steps = 0
        current = self.nodes[index].parent
        while current is not None:
            steps += 1
            if steps > len(self.nodes):
                raise RuntimeError(f"Cycle detected while walking from node {index}")
            current = self.nodes[current].parent
        return steps

    def edges(self) -> Iterator[tuple]:
        """Yield (parent_position, child_position) for every non-root node."""
        for node in self.nodes:
            if node.parent is not None:
                yield self.nodes[node.parent].position, node.position

    def __repr__(self) -> str:
        return f"Tree(root={self.root.position}, size={len(self)})"
