"""
Sampling-based planner covering the RRT family.

A single planning loop is configured by the Variant: the extension strategy
(plain or cost-optimizing), whether a goal tree is grown and joined through
the connect phase, and whether the raw path is shortcut afterwards.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from ..core.environment import Environment
from ..core.node import Tree
from ..core.path_planner import PathPlanner
from ..utils.geometry import Point, as_point, distance, path_length
from ..utils.visualization import draw_environment, draw_path, draw_tree
from .rrt import GOAL_THRESHOLD, Extender, Sampler, goal_reached
from .rrt_connect import connect_tree, extract_dual_path
from .rrt_star import OptimizingExtender
from .shortcut import DEFAULT_MAX_PASSES, shortcut_path
from .variants import Variant

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class SamplingPlanner(PathPlanner):
    """
    RRT, RRT*, RRT-Connect, RRT*-Connect and RRT-Connect+Shortcut planner.

    Attributes:
        variant (Variant): Which combination of operations is enabled
        start_tree (Tree): Tree rooted at the start
        goal_tree (Optional[Tree]): Tree rooted at the goal (bidirectional only)
        raw_path (Optional[List[Point]]): Path before shortcutting
        step_size (float): Maximum edge length when extending a tree
        max_iter (int): Maximum number of sampling iterations
        search_radius (float): Near-set radius for the optimizing variants
        goal_threshold (float): Distance at which the goal counts as reached
        goal_cost_history (List[float]): Goal cost after each improvement
    """

    def __init__(self, environment: Environment, config: Dict[str, Any],
                 variant: Optional[Variant] = None):
        """
        Initialize the planner.

        Args:
            environment: Shared, read-only planning environment
            config: Algorithm config block ({'name', 'parameters', ...})
            variant: Overrides the variant named in config['name']
        """
        self.variant = variant
        super().__init__(environment, config)

    def _initialize_algorithm(self) -> None:
        """Read parameters from config and reset planning state."""
        if self.variant is None:
            self.variant = Variant.from_name(self.config.get('name', 'rrt'))

        params = self.config.get('parameters') or {}
        self.step_size = float(params.get('step_size', 0.5))
        self.max_iter = int(params.get('max_iterations', 1000))
        self.search_radius = float(params.get('search_radius', 1.5))
        self.random_seed = params.get('random_seed', None)
        self.max_shortcut_passes = int(params.get('max_shortcut_passes', DEFAULT_MAX_PASSES))
        self.search_until_max_iter = bool(params.get('search_until_max_iterations', False))
        self.progress_interval = int(params.get('progress_interval', 100))
        self.goal_threshold = GOAL_THRESHOLD
        self._reset_state()

    def _reset_state(self) -> None:
        self.path = None
        self.start: Optional[Point] = None
        self.goal: Optional[Point] = None
        self.start_tree: Optional[Tree] = None
        self.goal_tree: Optional[Tree] = None
        self.raw_path: Optional[List[Point]] = None
        self.goal_index: Optional[int] = None
        self.connection: Optional[tuple] = None
        self.goal_cost_history: List[float] = []
        self.iterations = 0

    def _make_extender(self) -> Extender:
        if self.variant.optimizing:
            return OptimizingExtender(self.environment, self.step_size, self.search_radius)
        return Extender(self.environment, self.step_size)

    @property
    def trees(self) -> List[Tree]:
        return [t for t in (self.start_tree, self.goal_tree) if t is not None]

    @property
    def node_count(self) -> int:
        """Total number of explored configurations across all trees."""
        return sum(len(t) for t in self.trees)

    @property
    def tree_sizes(self) -> Dict[str, int]:
        """Per-tree node counts."""
        sizes = {}
        if self.start_tree is not None:
            sizes['start_tree'] = len(self.start_tree)
        if self.goal_tree is not None:
            sizes['goal_tree'] = len(self.goal_tree)
        return sizes

    @property
    def goal_cost(self) -> Optional[float]:
        """Accumulated cost of the found path through the tree(s)."""
        if self.goal_index is not None:
            return self.start_tree[self.goal_index].cost
        if self.connection is not None:
            start_node = self.start_tree[self.connection[0]]
            goal_node = self.goal_tree[self.connection[1]]
            return (start_node.cost + goal_node.cost +
                    distance(start_node.position, goal_node.position))
        return None

    def plan(self,
             start: Point,
             goal: Point,
             rng: Optional[np.random.Generator] = None,
             progress_callback: Optional[ProgressCallback] = None) -> Optional[List[Point]]:
        """
        Grow the tree(s) and return a path from start to goal.

        Every call starts from fresh trees. Start and goal must lie inside
        the bounds and outside all obstacles; this is not checked.

        Args:
            start: Starting position (x, y)
            goal: Goal position (x, y)
            rng: Random generator for this run; defaults to a new generator
                 seeded with the configured random_seed
            progress_callback: Called as callback(iteration, node_count) after
                               every iteration; it cannot change the outcome

        Returns:
            List of waypoints from start to goal, or None if max_iterations
            is exhausted without a connection
        """
        start_time = time.time()
        self._reset_state()

        self.start = as_point(start)
        self.goal = as_point(goal)
        if rng is None:
            rng = np.random.default_rng(self.random_seed)

        self.start_tree = Tree(self.start)
        if self.variant.bidirectional:
            self.goal_tree = Tree(self.goal)

        sampler = Sampler(self.environment, self.goal, rng)
        extender = self._make_extender()

        logger.info("Starting %s planning from %s to %s", self.variant.label, self.start, self.goal)

        if (goal_reached(self.start, self.goal, self.goal_threshold) and
                self.environment.is_edge_collision_free(self.start, self.goal)):
            self.goal_index = self.start_tree.add(self.goal, parent=0)
            self._record_goal_cost()
            raw_path = [self.start, self.goal]
        elif self.variant.bidirectional:
            raw_path = self._grow_bidirectional(sampler, extender, progress_callback)
        else:
            raw_path = self._grow_single_tree(sampler, extender, progress_callback)

        self.raw_path = raw_path
        self.path = raw_path
        if raw_path is not None and self.variant.shortcut:
            self.path = shortcut_path(raw_path, self.environment, self.max_shortcut_passes)

        self.planning_time = time.time() - start_time

        if self.path is None:
            logger.info("%s: no path found after %d iterations (%d nodes)",
                        self.variant.label, self.iterations, self.node_count)
        else:
            logger.info("%s: path found after %d iterations, %d waypoints, length %.2f",
                        self.variant.label, self.iterations, len(self.path),
                        self.get_path_length())
        return self.path

    def _grow_single_tree(self,
                          sampler: Sampler,
                          extender: Extender,
                          progress_callback: Optional[ProgressCallback]) -> Optional[List[Point]]:
        """Main RRT / RRT* loop over one tree rooted at the start."""
        tree = self.start_tree
        keep_searching = self.search_until_max_iter and self.variant.optimizing

        for i in range(self.max_iter):
            self.iterations = i + 1
            new_index = extender.extend(tree, sampler.sample())

            if new_index is not None and goal_reached(tree.position(new_index), self.goal,
                                                      self.goal_threshold):
                self._attach_goal(tree, extender, new_index)

            if self.goal_index is not None:
                self._record_goal_cost()

            self._report_progress(i + 1, progress_callback)

            if self.goal_index is not None and not keep_searching:
                break

        if self.goal_index is None:
            return None
        return tree.path_to_root(self.goal_index)[::-1]

    def _attach_goal(self, tree: Tree, extender: Extender, new_index: int) -> None:
        """
        Connect the goal to the tree through the node that reached it.

        The first time, the goal becomes a node (or the reaching node itself
        when it already sits on the goal) inserted with the variant's
        extension rule. Afterwards, a cheaper reaching node re-parents it.
        """
        new_point = tree.position(new_index)

        if self.goal_index is None:
            if new_point == self.goal:
                self.goal_index = new_index
            elif self.environment.is_edge_collision_free(new_point, self.goal):
                self.goal_index = extender.insert(tree, self.goal, new_index)
            if self.goal_index is not None:
                logger.debug("Goal reached at iteration %d", self.iterations)
            return

        if new_index == self.goal_index:
            return
        goal_node = tree[self.goal_index]
        new_cost = tree[new_index].cost + distance(new_point, self.goal)
        if new_cost < goal_node.cost and self.environment.is_edge_collision_free(new_point, self.goal):
            tree.reparent(self.goal_index, new_index)

    def _grow_bidirectional(self,
                            sampler: Sampler,
                            extender: Extender,
                            progress_callback: Optional[ProgressCallback]) -> Optional[List[Point]]:
        """
        RRT-Connect / RRT*-Connect loop.

        The tree in the extending role grows toward a sample, then the other
        tree tries to connect to the new node. Any failure swaps the roles
        so both trees grow at a similar rate.
        """
        roles = [self.start_tree, self.goal_tree]

        for i in range(self.max_iter):
            self.iterations = i + 1
            active, other = roles

            new_index = extender.extend(active, sampler.sample())
            if new_index is not None:
                connection = connect_tree(other, self.environment,
                                          active.position(new_index), self.step_size)
                if connection is not None:
                    if active is self.start_tree:
                        self.connection = (new_index, connection)
                    else:
                        self.connection = (connection, new_index)
                    logger.debug("Trees connected at iteration %d (start tree: %d, goal tree: %d)",
                                 self.iterations, len(self.start_tree), len(self.goal_tree))
                    self._report_progress(i + 1, progress_callback)
                    return extract_dual_path(self.start_tree, self.connection[0],
                                             self.goal_tree, self.connection[1])

            roles.reverse()
            self._report_progress(i + 1, progress_callback)

        return None

    def _record_goal_cost(self) -> None:
        cost = self.goal_cost
        if not self.goal_cost_history or cost < self.goal_cost_history[-1]:
            self.goal_cost_history.append(cost)

    def _report_progress(self, iteration: int, progress_callback: Optional[ProgressCallback]) -> None:
        if self.progress_interval > 0 and iteration % self.progress_interval == 0:
            logger.debug("Iteration %d/%d, %d nodes", iteration, self.max_iter, self.node_count)
        if progress_callback is not None:
            progress_callback(iteration, self.node_count)

    def get_metrics(self) -> Dict[str, Any]:
        """Get performance metrics from the last planning run."""
        metrics = {
            'algorithm': self.variant.label,
            'path_length': self.get_path_length(),
            'planning_time': self.planning_time,
            'iterations': self.iterations,
            'nodes_explored': self.node_count,
            'tree_size': self.node_count,
            'goal_reached': self.path is not None,
            'path_exists': self.path is not None,
            'waypoints': len(self.path) if self.path else 0,
            'goal_cost': self.goal_cost,
        }
        metrics.update({f'{name}_size': size for name, size in self.tree_sizes.items()})

        if self.variant.optimizing and not self.variant.bidirectional:
            metrics['goal_cost_history'] = list(self.goal_cost_history)

        if self.variant.shortcut and self.raw_path is not None:
            raw_length = path_length(self.raw_path)
            metrics['raw_waypoints'] = len(self.raw_path)
            metrics['raw_path_length'] = raw_length
            metrics['shortening_percent'] = (
                100.0 * (raw_length - self.get_path_length()) / raw_length if raw_length > 0 else 0.0
            )

        return metrics

    def visualize(self, ax, show_tree: bool = True, **kwargs) -> None:
        """
        Visualize the tree(s) and the path.

        Args:
            ax: Matplotlib axis
            show_tree: Whether to draw the full tree(s)
            **kwargs: Passed through to draw_path
        """
        vis_config = self.config.get('visualization') or {}

        draw_environment(ax, self.environment, start=self.start, goal=self.goal)

        if show_tree:
            tree_alpha = vis_config.get('tree_alpha', 0.3)
            if self.start_tree is not None:
                draw_tree(ax, self.start_tree, color=vis_config.get('tree_color', 'blue'),
                          alpha=tree_alpha)
            if self.goal_tree is not None:
                draw_tree(ax, self.goal_tree, color=vis_config.get('goal_tree_color', 'orange'),
                          alpha=tree_alpha)

        if self.variant.shortcut and self.raw_path:
            draw_path(ax, self.raw_path, color=vis_config.get('raw_path_color', 'grey'),
                      label="Raw Path", linestyle='--')

        if self.path:
            draw_path(ax, self.path, color=vis_config.get('path_color', 'green'),
                      label=f"{self.variant.label} Path", **kwargs)

        ax.legend(loc='best')
        ax.set_title(f"{self.variant.label} Algorithm\n"
                     f"Length: {self.get_path_length():.2f}, "
                     f"Time: {self.planning_time:.3f}s, "
                     f"Nodes: {self.node_count}")


def create_planner(name: str, environment: Environment,
                   config: Optional[Dict[str, Any]] = None) -> SamplingPlanner:
    """
    Build a planner for a variant name.

    Args:
        name: One of 'rrt', 'rrt_star', 'rrt_connect', 'rrt_star_connect',
              'rrt_connect_shortcut'
        environment: Planning environment
        config: Optional algorithm config block

    Raises:
        ValueError: If the name is not a known variant
    """
    return SamplingPlanner(environment, config or {}, Variant.from_name(name))
