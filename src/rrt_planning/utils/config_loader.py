"""
YAML configuration file loader for the sampling-based planners.

This module provides utilities to load the environment description and the
per-variant algorithm parameters from YAML files.
"""

from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from .geometry import Point, as_point


def load_yaml_config(filepath: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filepath: Path to YAML file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If file is not valid YAML

    Example:
        >>> config = load_yaml_config('configs/environment.yaml')
        >>> print(config['environment']['bounds'])
        {'x_min': 0.0, 'x_max': 100.0, 'y_min': 0.0, 'y_max': 100.0}
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, 'r') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML file {filepath}: {e}")

    return config if config is not None else {}


def load_environment_config(config_dir: str = 'configs') -> Dict[str, Any]:
    """
    Load environment configuration from YAML file.

    Args:
        config_dir: Directory containing config files (default: 'configs')

    Returns:
        Dictionary with environment parameters:
        - bounds: {x_min, x_max, y_min, y_max}
        - start_point: {x, y}
        - goal_point: {x, y}
        - obstacles: List of {origin, size}
    """
    config_path = Path(config_dir) / 'environment.yaml'
    config = load_yaml_config(str(config_path))
    return config.get('environment', {})


def load_algorithm_config(algorithm_name: str, config_dir: str = 'configs') -> Dict[str, Any]:
    """
    Load algorithm-specific configuration from YAML file.

    Args:
        algorithm_name: Variant name ('rrt', 'rrt_star', 'rrt_connect', ...)
        config_dir: Directory containing config files (default: 'configs')

    Returns:
        Dictionary with the 'algorithm' block (name, parameters,
        visualization, output)

    Raises:
        FileNotFoundError: If algorithm config file doesn't exist
    """
    config_path = Path(config_dir) / f'{algorithm_name}.yaml'
    config = load_yaml_config(str(config_path))
    return config.get('algorithm', {})


def get_start_goal(env_config: Dict[str, Any]) -> Tuple[Point, Point]:
    """
    Extract start and goal points from the environment configuration.

    Raises:
        ValueError: If start_point or goal_point is missing
    """
    points = []
    for key in ('start_point', 'goal_point'):
        if key not in env_config:
            raise ValueError(f"Environment config is missing '{key}'")
        points.append(as_point((env_config[key]['x'], env_config[key]['y'])))
    return points[0], points[1]


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge multiple configuration dictionaries.

    Later dictionaries override earlier ones for conflicting keys; nested
    dictionaries are merged key by key.

    Args:
        *configs: Variable number of configuration dictionaries

    Returns:
        Merged configuration dictionary

    Example:
        >>> base = {'parameters': {'step_size': 0.5, 'max_iterations': 1000}}
        >>> override = {'parameters': {'step_size': 2.0}}
        >>> merge_configs(base, override)
        {'parameters': {'step_size': 2.0, 'max_iterations': 1000}}
    """
    merged: Dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = merge_configs(merged[key], value)
            else:
                merged[key] = value
    return merged
