"""
Environment representation for path planning.

This module defines the Obstacle and Environment classes which encapsulate the
planning space: rectangular obstacles, boundaries, and the collision oracle
shared by every planner variant.
"""

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from ..utils.geometry import COLLISION_RESOLUTION, Point, discretize_segment

Bounds = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Obstacle:
    """
    Axis-aligned rectangular obstacle.

    Attributes:
        x (float): X-coordinate of the lower-left corner
        y (float): Y-coordinate of the lower-left corner
        width (float): Extent along x (non-negative)
        height (float): Extent along y (non-negative)
    """

    x: float
    y: float
    width: float
    height: float

    def contains(self, point: Point) -> bool:
        """
        Check if a point lies inside the rectangle.

        Both bounds are inclusive, so points on the border count as inside.

        Example:
            >>> Obstacle(0.0, 0.0, 2.0, 1.0).contains((2.0, 1.0))
            True
        """
        px, py = point
        return (self.x <= px <= self.x + self.width and
                self.y <= py <= self.y + self.height)


class Environment:
    """
    Represents the planning environment with obstacles and boundaries.

    Obstacles and bounds are read-only for the lifetime of the environment,
    so a single instance can be shared by several planners.

    Attributes:
        bounds (Tuple[float, float, float, float]): (x_min, x_max, y_min, y_max)
        obstacles (Tuple[Obstacle, ...]): Rectangular obstacles
        resolution (float): Sampling step used by is_edge_collision_free
    """

    def __init__(self,
                 bounds: Bounds,
                 obstacles: Sequence[Obstacle] = (),
                 resolution: float = COLLISION_RESOLUTION):
        """
        Initialize the environment.

        Args:
            bounds: (x_min, x_max, y_min, y_max) of the configuration space
            obstacles: Rectangular obstacles with non-negative width/height
            resolution: Segment discretization step for collision checks

        Example:
            >>> env = Environment(
            ...     bounds=(0.0, 20.0, 0.0, 20.0),
            ...     obstacles=[Obstacle(5.0, 5.0, 2.0, 2.0)]
            ... )
        """
        self.bounds = tuple(float(b) for b in bounds)
        self.obstacles = tuple(obstacles)
        self.resolution = resolution

    @classmethod
    def from_config(cls, env_config: Dict[str, Any]) -> "Environment":
        """
        Create an Environment from a configuration dictionary.

        Args:
            env_config: The 'environment' section of environment.yaml with
                        'bounds' {x_min, x_max, y_min, y_max} and 'obstacles'
                        as a list of {origin: [x, y], size: [w, h]}

        Raises:
            ValueError: If the bounds section is missing
        """
        if 'bounds' not in env_config:
            raise ValueError("Environment config is missing the 'bounds' section")

        b = env_config['bounds']
        bounds = (b['x_min'], b['x_max'], b['y_min'], b['y_max'])

        obstacles = []
        for obs in env_config.get('obstacles') or []:
            x, y = obs['origin']
            width, height = obs['size']
            obstacles.append(Obstacle(float(x), float(y), float(width), float(height)))

        resolution = env_config.get('collision_resolution', COLLISION_RESOLUTION)
        return cls(bounds, obstacles, resolution)

    @property
    def width(self) -> float:
        return self.bounds[1] - self.bounds[0]

    @property
    def height(self) -> float:
        return self.bounds[3] - self.bounds[2]

    def is_point_in_bounds(self, point: Point) -> bool:
        """
        Check if a point is within environment boundaries (inclusive).

        Args:
            point: (x, y) coordinates

        Returns:
            True if point is within bounds, False otherwise
        """
        x, y = point
        x_min, x_max, y_min, y_max = self.bounds
        return x_min <= x <= x_max and y_min <= y <= y_max

    def is_point_in_obstacle(self, point: Point) -> bool:
        """
        Check if a point is inside any obstacle.

        Args:
            point: (x, y) coordinates to check

        Returns:
            True if point is inside an obstacle, False otherwise
        """
        return any(obs.contains(point) for obs in self.obstacles)

    def is_point_free(self, point: Point) -> bool:
        """True if the point is inside the bounds and outside every obstacle."""
        return self.is_point_in_bounds(point) and not self.is_point_in_obstacle(point)

    def is_edge_collision_free(self, point1: Point, point2: Point) -> bool:
        """
        Check if the straight line between two points is collision-free.

        The segment is discretized at `resolution` (both endpoints included)
        and each sample is tested against the bounds and every obstacle.

        Args:
            point1: Start point (x1, y1)
            point2: End point (x2, y2)

        Returns:
            True if every sample is free, False on the first violation

        Note:
            Obstacles narrower than the resolution may be stepped over. This
            is an accepted approximation of the discretized check.
        """
        for sample in discretize_segment(point1, point2, self.resolution):
            if not self.is_point_free(sample):
                return False
        return True

    def __repr__(self) -> str:
        """String representation of the environment."""
        return (f"Environment(bounds={self.bounds}, "
                f"obstacles={len(self.obstacles)})")
