"""
Abstract base class for path planning algorithms.

This module defines the common interface that the sampling-based planners
(RRT, RRT*, RRT-Connect and their variants) implement, along with shared
path validation, measurement and file I/O.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import numpy as np

from ..utils.geometry import Point, as_path, path_length


class PathPlanner(ABC):
    """
    Abstract base class for path planning algorithms.

    Attributes:
        environment: The planning environment containing obstacles and bounds
        config (Dict[str, Any]): Algorithm-specific configuration parameters
        path (Optional[List[Tuple[float, float]]]): Computed path from start to goal
        planning_time (float): Time taken to compute the path (seconds)
    """

    def __init__(self, environment, config: Dict[str, Any]):
        """
        Initialize the path planner.

        Args:
            environment: Environment object containing obstacles and bounds
            config: Dictionary of algorithm-specific parameters loaded from YAML
        """
        self.environment = environment
        self.config = config or {}
        self.path: Optional[List[Point]] = None
        self.planning_time: float = 0.0
        self._initialize_algorithm()

    @abstractmethod
    def _initialize_algorithm(self) -> None:
        """
        Initialize algorithm-specific parameters and data structures.

        Called once during __init__.
        """

    @abstractmethod
    def plan(self, start: Point, goal: Point, **kwargs) -> Optional[List[Point]]:
        """
        Compute a collision-free path from start to goal.

        Implementations store the result in self.path and the elapsed time
        in self.planning_time.

        Args:
            start: Starting position (x, y)
            goal: Goal position (x, y)

        Returns:
            List of waypoints [(x1, y1), (x2, y2), ...] if a path is found,
            None if the iteration budget is exhausted first
        """

    @abstractmethod
    def get_metrics(self) -> Dict[str, Any]:
        """
        Get performance metrics from the last planning run.

        Returns:
            Dictionary with at least path_length, planning_time and the
            number of explored nodes
        """

    @abstractmethod
    def visualize(self, ax, **kwargs) -> None:
        """
        Draw the planning result on a matplotlib axis.

        Args:
            ax: Matplotlib axis object to draw on
            **kwargs: Additional visualization parameters
        """

    def validate_path(self) -> bool:
        """
        Validate that the computed path is collision-free.

        Returns:
            True if a path exists and every edge passes the environment's
            discretized collision check
        """
        if self.path is None or len(self.path) < 2:
            return False

        for i in range(len(self.path) - 1):
            if not self.environment.is_edge_collision_free(self.path[i], self.path[i + 1]):
                return False

        return True

    def get_path_length(self) -> float:
        """
        Calculate the total Euclidean length of the computed path.

        Returns:
            Path length in environment units, 0.0 if no path exists
        """
        return path_length(self.path)

    def save_path(self, filename: str) -> None:
        """
        Save the computed path to a file.

        Supports multiple formats based on file extension:
        - .npy: NumPy binary format
        - .json: JSON format with path and metrics
        - .csv: Comma-separated values

        Args:
            filename: Output file path with extension

        Raises:
            ValueError: If no path exists or file format is unsupported
        """
        if self.path is None:
            raise ValueError("No path to save. Run plan() first.")

        filename = str(filename)
        if filename.endswith('.npy'):
            np.save(filename, np.array(self.path))
        elif filename.endswith('.json'):
            with open(filename, 'w') as f:
                json.dump({
                    'path': [list(p) for p in self.path],
                    'metrics': self.get_metrics()
                }, f, indent=2)
        elif filename.endswith('.csv'):
            np.savetxt(filename, np.array(self.path),
                       delimiter=',', header='x,y', comments='')
        else:
            raise ValueError(f"Unsupported file format: {filename}. "
                             f"Use .npy, .json, or .csv")

    def load_path(self, filename: str) -> List[Point]:
        """
        Load a path from a file written by save_path().

        Args:
            filename: Input file path

        Returns:
            List of waypoints loaded from file

        Raises:
            ValueError: If the file format is unsupported
        """
        filename = str(filename)
        if filename.endswith('.npy'):
            self.path = as_path(np.load(filename))
        elif filename.endswith('.json'):
            with open(filename, 'r') as f:
                data = json.load(f)
            self.path = as_path(data['path'])
        elif filename.endswith('.csv'):
            path_array = np.loadtxt(filename, delimiter=',', skiprows=1, ndmin=2)
            self.path = as_path(path_array)
        else:
            raise ValueError(f"Unsupported file format: {filename}")

        return self.path

    def __repr__(self) -> str:
        """String representation of the planner."""
        return f"{self.__class__.__name__}(config={self.config})"

    def __str__(self) -> str:
        """Human-readable string representation."""
        status = "with path" if self.path else "no path"
        return f"{self.__class__.__name__} ({status})"
