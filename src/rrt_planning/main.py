"""
Main entry point for the sampling-based planners.

This CLI runs one RRT variant, or all of them side by side, on an
environment described by YAML configuration files.
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import matplotlib.pyplot as plt

from .algorithms.planner import SamplingPlanner
from .algorithms.variants import Variant
from .core.environment import Environment
from .utils.config_loader import (get_start_goal, load_algorithm_config,
                                  load_environment_config)

ALGORITHM_CHOICES = [v.value for v in Variant] + ['all']


def create_planner_from_config(algorithm_name: str,
                               environment: Environment,
                               config_dir: str) -> SamplingPlanner:
    """
    Create a planner for a variant from its YAML file.

    Falls back to default parameters when the variant has no config file.
    """
    try:
        alg_config = load_algorithm_config(algorithm_name, config_dir)
    except FileNotFoundError:
        print(f"No config file for {algorithm_name}, using default parameters")
        alg_config = {}
    return SamplingPlanner(environment, alg_config, Variant.from_name(algorithm_name))


def print_metrics(metrics: Dict[str, Any]) -> None:
    """Print a metrics dictionary as an indented key/value list."""
    print("\n" + "=" * 60)
    print("Results:")
    print("=" * 60)
    for key, value in metrics.items():
        if key == 'goal_cost_history':
            value = f"{len(value)} improvements"
        print(f"  {key}: {value}")
    print("=" * 60 + "\n")


def print_comparison(results: Dict[str, Dict[str, Any]]) -> None:
    """Print one line per variant: nodes, waypoints, length and time."""
    print("\n" + "=" * 70)
    print("Algorithm comparison:")
    print("=" * 70)
    for label, metrics in results.items():
        line = f"{label:<24} total nodes={metrics['nodes_explored']}"
        if metrics['path_exists']:
            line += (f", waypoints={metrics['waypoints']}"
                     f", length={metrics['path_length']:.2f}")
        else:
            line += ", no path found"
        line += f", time={metrics['planning_time']:.3f}s"
        print(line)
    print("=" * 70 + "\n")


def save_outputs(planner: SamplingPlanner, algorithm_name: str, output_config: Dict[str, Any]) -> None:
    """Save the current figure and the path data for one planner."""
    save_path = Path(output_config.get('save_path', f'outputs/{algorithm_name}/'))
    save_path.mkdir(parents=True, exist_ok=True)

    plot_file = save_path / output_config.get('plot_filename', 'path_plot.png')
    plt.savefig(plot_file, dpi=150, bbox_inches='tight')
    print(f"Plot saved to: {plot_file}")

    path_file = save_path / 'path.json'
    planner.save_path(str(path_file))
    print(f"Path data saved to: {path_file}")


def run_planner(algorithm_name: str,
                config_dir: str = 'configs',
                visualize: bool = True,
                save: bool = False,
                seed: Optional[int] = None) -> Optional[SamplingPlanner]:
    """
    Run a single planner variant.

    Args:
        algorithm_name: Variant name ('rrt', 'rrt_star', ...)
        config_dir: Directory containing configuration files
        visualize: Whether to show visualization
        save: Whether to save output files
        seed: Overrides the configured random seed

    Returns:
        The planner after planning, or None if the name is unknown
    """
    if algorithm_name not in ALGORITHM_CHOICES:
        print(f"Error: Unknown algorithm '{algorithm_name}'")
        print(f"Available algorithms: {', '.join(ALGORITHM_CHOICES)}")
        return None

    print(f"\n{'=' * 60}")
    print(f"Running {algorithm_name.upper()} Path Planning Algorithm")
    print(f"{'=' * 60}\n")

    env_config = load_environment_config(config_dir)
    environment = Environment.from_config(env_config)
    start, goal = get_start_goal(env_config)
    print(f"Environment: {environment}")
    print(f"Start: {start}")
    print(f"Goal: {goal}")

    planner = create_planner_from_config(algorithm_name, environment, config_dir)
    if seed is not None:
        planner.random_seed = seed
    print(f"Planner: {planner}")

    print("\nPlanning path...")
    path = planner.plan(start, goal)
    print_metrics(planner.get_metrics())

    if path is None:
        print("No path found!")
        return planner

    print(f"Path found with {len(path)} waypoints")

    if visualize or save:
        fig, ax = plt.subplots(figsize=(10, 8))
        planner.visualize(ax)
        plt.tight_layout()
        if save:
            save_outputs(planner, algorithm_name, planner.config.get('output') or {})
        if visualize:
            plt.show()
        plt.close(fig)

    return planner


def run_comparison(config_dir: str = 'configs',
                   visualize: bool = True,
                   seed: Optional[int] = None) -> Dict[str, Dict[str, Any]]:
    """
    Run every variant on the same environment and print a comparison.

    Returns:
        Metrics of each variant keyed by its display label
    """
    env_config = load_environment_config(config_dir)
    environment = Environment.from_config(env_config)
    start, goal = get_start_goal(env_config)

    planners = []
    results = {}
    for index, variant in enumerate(Variant, start=1):
        print(f"\n[{index}/{len(Variant)}] Running {variant.label}...")
        planner = create_planner_from_config(variant.value, environment, config_dir)
        if seed is not None:
            planner.random_seed = seed
        planner.plan(start, goal)
        planners.append(planner)
        results[variant.label] = planner.get_metrics()

    print_comparison(results)

    if visualize:
        fig, axes = plt.subplots(2, 3, figsize=(18, 11))
        for ax, planner in zip(axes.flat, planners):
            planner.visualize(ax)
        axes.flat[-1].axis('off')
        plt.tight_layout()
        plt.show()
        plt.close(fig)

    return results


def main(argv=None):
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description='Sampling-based path planning (RRT family)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run RRT-Connect
  rrt-planning --algorithm rrt_connect

  # Run RRT* and save results
  rrt-planning --algorithm rrt_star --save

  # Compare all variants without visualization
  rrt-planning --algorithm all --no-viz

  # Use custom config directory
  rrt-planning --algorithm rrt --config-dir ../my_configs
        """
    )

    parser.add_argument(
        '--algorithm', '-a',
        type=str,
        choices=ALGORITHM_CHOICES,
        required=True,
        help='Planner variant to run, or "all" to compare every variant'
    )

    parser.add_argument(
        '--config-dir', '-c',
        type=str,
        default='configs',
        help='Directory containing YAML configuration files (default: configs)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed overriding the configured one'
    )

    parser.add_argument(
        '--save', '-s',
        action='store_true',
        help='Save output files (plot and path)'
    )

    parser.add_argument(
        '--no-viz',
        action='store_true',
        help='Disable visualization'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log planner progress at DEBUG level'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    if args.algorithm == 'all':
        run_comparison(config_dir=args.config_dir, visualize=not args.no_viz, seed=args.seed)
    else:
        run_planner(
            algorithm_name=args.algorithm,
            config_dir=args.config_dir,
            visualize=not args.no_viz,
            save=args.save,
            seed=args.seed
        )


if __name__ == '__main__':
    main()
