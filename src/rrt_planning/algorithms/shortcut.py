"""
Path shortcutting post-processor.

Greedy line-of-sight simplification: from each waypoint, jump to the
farthest later waypoint that can be reached by a collision-free straight
segment and drop everything in between.
"""

import logging
from typing import List, Sequence

from ..core.environment import Environment
from ..utils.geometry import Point, path_length

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 100


def shortcut_path(path: Sequence[Point],
                  environment: Environment,
                  max_passes: int = DEFAULT_MAX_PASSES) -> List[Point]:
    """
    Shorten a path by removing waypoints that have line of sight around them.

    Each pass scans left to right. At index i the largest skip is tried
    first, for skip from len(path) - 1 - i down to 2; the first collision-free
    shortcut i -> i + skip deletes the points in between and the scan stays
    at i. Passes repeat until one makes no change or max_passes is reached.

    Args:
        path: Waypoints from start to goal
        environment: Collision oracle used for the line-of-sight tests
        max_passes: Upper bound on the number of full passes

    Returns:
        A new, never longer list of waypoints; paths with 2 or fewer points
        are returned as an unchanged copy

    Example:
        >>> env = Environment((0.0, 5.0, 0.0, 2.0))
        >>> shortcut_path([(0, 0), (1, 1), (2, 0), (3, 1), (4, 0)], env)
        [(0, 0), (4, 0)]
    """
    optimized = list(path)
    if len(optimized) <= 2:
        return optimized

    original_length = path_length(optimized)
    original_count = len(optimized)

    improved = True
    passes = 0
    while improved and passes < max_passes:
        improved = False
        passes += 1

        i = 0
        while i < len(optimized) - 2:
            shortened = False
            for skip in range(len(optimized) - 1 - i, 1, -1):
                j = i + skip
                if environment.is_edge_collision_free(optimized[i], optimized[j]):
                    del optimized[i + 1:j]
                    logger.debug("Pass %d: skipped %d waypoints from %d to %d",
                                 passes, skip - 1, i, j)
                    improved = shortened = True
                    break
            if not shortened:
                i += 1

    optimized_length = path_length(optimized)
    logger.info("Shortcut: %d -> %d waypoints, length %.2f -> %.2f after %d passes",
                original_count, len(optimized), original_length, optimized_length, passes)
    return optimized
