"""tests/test_visualization.py - plotting smoke tests on the Agg backend"""
import matplotlib.pyplot as plt
import pytest

from rrt_planning.algorithms.planner import SamplingPlanner
from rrt_planning.algorithms.variants import Variant
from rrt_planning.core.node import Tree
from rrt_planning.utils.visualization import draw_environment, draw_path, draw_tree


@pytest.fixture
def ax():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


def test_draw_environment(ax, wall_env):
    draw_environment(ax, wall_env, start=(2.0, 2.0), goal=(18.0, 2.0))
    # bounds outline plus one obstacle
    assert len(ax.patches) == 2
    assert ax.get_xlim() == (-1.0, 21.0)


def test_draw_tree_and_path(ax):
    tree = Tree((0.0, 0.0))
    draw_tree(ax, tree)
    assert len(ax.collections) == 0
    tree.add((1.0, 0.0), parent=0)
    draw_tree(ax, tree)
    assert len(ax.collections) == 1
    draw_path(ax, [(0.0, 0.0), (1.0, 0.0)])
    assert len(ax.lines) == 1


@pytest.mark.parametrize('variant', [Variant.RRT_STAR, Variant.RRT_CONNECT_SHORTCUT])
def test_planner_visualize(ax, wall_env, variant):
    planner = SamplingPlanner(wall_env, {'parameters': {'step_size': 1.0, 'random_seed': 2,
                                                        'max_iterations': 5000}}, variant)
    planner.plan((2.0, 2.0), (18.0, 2.0))
    planner.visualize(ax)
    assert variant.label in ax.get_title()
    assert len(ax.lines) >= 1
