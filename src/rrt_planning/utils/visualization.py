"""
Visualization utilities for sampling-based planners.

This module provides common drawing functions for the environment, search
trees and paths on a matplotlib axis.
"""

from typing import Optional, Sequence

import matplotlib.patches as patches
from matplotlib.collections import LineCollection

from .geometry import Point


def draw_environment(ax,
                     environment,
                     start: Optional[Point] = None,
                     goal: Optional[Point] = None,
                     margin: float = 1.0):
    """
    Draw the environment with obstacles, start and goal.

    Clears the axis first, so call this before drawing trees or paths.

    Args:
        ax: Matplotlib axis to draw on
        environment: Environment with bounds and rectangular obstacles
        start: Optional start point (x, y)
        goal: Optional goal point (x, y)
        margin: Extra space around the bounds

    Example:
        >>> fig, ax = plt.subplots()
        >>> env = Environment((0, 20, 0, 20), [Obstacle(5, 5, 2, 2)])
        >>> draw_environment(ax, env, start=(0, 0), goal=(15, 15))
        >>> plt.show()
    """
    ax.clear()

    x_min, x_max, y_min, y_max = environment.bounds
    ax.add_patch(patches.Rectangle(
        (x_min, y_min),
        x_max - x_min, y_max - y_min,
        fill=False,
        edgecolor='black',
        linewidth=1.0,
        zorder=0
    ))

    # Draw obstacles as grey rectangles
    for obs in environment.obstacles:
        ax.add_patch(patches.Rectangle(
            (obs.x, obs.y),
            obs.width, obs.height,
            facecolor='grey',
            edgecolor='black',
            linewidth=1.5,
            zorder=1
        ))

    # Draw start point (green)
    if start is not None:
        ax.scatter(*start, color='green', s=100, marker='o',
                   label="Start", zorder=10, edgecolors='black', linewidths=1.5)

    # Draw goal point (red)
    if goal is not None:
        ax.scatter(*goal, color='red', s=100, marker='*',
                   label="Goal", zorder=10, edgecolors='black', linewidths=1.5)

    setup_plot_limits(ax, x_min, x_max, y_min, y_max, margin)
    ax.set_xlabel("X Position")
    ax.set_ylabel("Y Position")
    ax.set_aspect('equal', adjustable='box')
    ax.grid(True, alpha=0.3)


def draw_tree(ax, tree, color: str = 'blue', alpha: float = 0.3, linewidth: float = 0.5):
    """
    Draw every parent-child edge of a search tree.

    Args:
        ax: Matplotlib axis
        tree: Tree whose edges to draw
        color: Edge color
        alpha: Edge transparency
        linewidth: Edge width
    """
    segments = list(tree.edges())
    if not segments:
        return
    ax.add_collection(LineCollection(segments, colors=color, linewidths=linewidth,
                                     alpha=alpha, zorder=2))


def draw_path(ax,
              path: Sequence[Point],
              color: str = 'green',
              label: str = "Path",
              linewidth: float = 2.0,
              **kwargs):
    """
    Draw a waypoint path with markers at each waypoint.

    Args:
        ax: Matplotlib axis
        path: Waypoints [(x1, y1), ...]
        color: Line color
        label: Legend label
        linewidth: Line width
        **kwargs: Extra matplotlib line properties
    """
    if not path:
        return
    path_x, path_y = zip(*path)
    ax.plot(path_x, path_y, color=color, linewidth=linewidth, label=label,
            zorder=3, marker='o', markersize=3, **kwargs)


def setup_plot_limits(ax, x_min: float, x_max: float, y_min: float, y_max: float, margin: float = 1.0):
    """
    Set plot axis limits with optional margin.

    Args:
        ax: Matplotlib axis
        x_min: Minimum x value
        x_max: Maximum x value
        y_min: Minimum y value
        y_max: Maximum y value
        margin: Additional margin around boundaries (default: 1.0)
    """
    ax.set_xlim(x_min - margin, x_max + margin)
    ax.set_ylim(y_min - margin, y_max + margin)
