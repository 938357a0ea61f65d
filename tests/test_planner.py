"""tests/test_planner.py - end-to-end behavior of every planner variant"""
import json
import math

import numpy as np
import pytest

from rrt_planning.algorithms.planner import SamplingPlanner, create_planner
from rrt_planning.algorithms.variants import Variant
from rrt_planning.utils.geometry import path_length

ALL_VARIANTS = list(Variant)


def make_planner(variant, env, **params):
    parameters = {'step_size': 1.0, 'max_iterations': 5000, 'search_radius': 2.5,
                  'random_seed': 7}
    parameters.update(params)
    return SamplingPlanner(env, {'parameters': parameters}, variant)


def assert_tree_invariants(planner):
    for tree in planner.trees:
        for index, node in enumerate(tree):
            assert tree.depth(index) <= len(tree)
            if node.parent is not None:
                parent = tree[node.parent]
                assert node.cost == pytest.approx(
                    parent.cost + math.hypot(node.x - parent.x, node.y - parent.y))


class TestVariant:

    def test_from_name(self):
        assert Variant.from_name('rrt_star') is Variant.RRT_STAR
        assert Variant.from_name('RRT-Connect') is Variant.RRT_CONNECT

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            Variant.from_name('prm')

    def test_switches(self):
        assert not Variant.RRT.optimizing and not Variant.RRT.bidirectional
        assert Variant.RRT_STAR.optimizing and not Variant.RRT_STAR.bidirectional
        assert Variant.RRT_STAR_CONNECT.optimizing and Variant.RRT_STAR_CONNECT.bidirectional
        assert Variant.RRT_CONNECT_SHORTCUT.shortcut and Variant.RRT_CONNECT_SHORTCUT.bidirectional
        assert not Variant.RRT_CONNECT.shortcut


class TestConfiguration:

    def test_defaults(self, open_field):
        planner = SamplingPlanner(open_field, {}, Variant.RRT)
        assert planner.step_size == 0.5
        assert planner.max_iter == 1000
        assert planner.search_radius == 1.5
        assert planner.goal_threshold == 0.5
        assert planner.random_seed is None

    def test_variant_from_config_name(self, open_field):
        planner = SamplingPlanner(open_field, {'name': 'rrt_star_connect'})
        assert planner.variant is Variant.RRT_STAR_CONNECT

    def test_create_planner(self, open_field):
        planner = create_planner('rrt_connect_shortcut', open_field,
                                 {'parameters': {'step_size': 2.0}})
        assert planner.variant is Variant.RRT_CONNECT_SHORTCUT
        assert planner.step_size == 2.0

    def test_create_planner_unknown(self, open_field):
        with pytest.raises(ValueError):
            create_planner('dijkstra', open_field)


@pytest.mark.parametrize('variant', ALL_VARIANTS)
class TestAllVariants:

    def test_open_field_near_straight_line(self, variant, open_field):
        planner = make_planner(variant, open_field)
        path = planner.plan((0.0, 0.0), (10.0, 0.0))
        assert path is not None
        assert path_length(path) < 3 * 10.0

    def test_endpoints(self, variant, wall_env):
        planner = make_planner(variant, wall_env)
        path = planner.plan((2.0, 2.0), (18.0, 2.0))
        assert path is not None
        assert path[0] == pytest.approx((2.0, 2.0))
        assert path[-1] == pytest.approx((18.0, 2.0))

    def test_path_is_collision_free(self, variant, wall_env):
        planner = make_planner(variant, wall_env)
        path = planner.plan((2.0, 2.0), (18.0, 2.0))
        assert path is not None
        for a, b in zip(path, path[1:]):
            assert wall_env.is_edge_collision_free(a, b)
        assert planner.validate_path()

    def test_trees_are_acyclic_with_consistent_costs(self, variant, wall_env):
        planner = make_planner(variant, wall_env)
        planner.plan((2.0, 2.0), (18.0, 2.0))
        assert_tree_invariants(planner)

    def test_deterministic_with_seed(self, variant, wall_env):
        first = make_planner(variant, wall_env)
        second = make_planner(variant, wall_env)
        path_a = first.plan((2.0, 2.0), (18.0, 2.0))
        path_b = second.plan((2.0, 2.0), (18.0, 2.0))
        assert path_a == path_b
        for tree_a, tree_b in zip(first.trees, second.trees):
            assert [n.position for n in tree_a] == [n.position for n in tree_b]
            assert [n.parent for n in tree_a] == [n.parent for n in tree_b]

    def test_replanning_starts_fresh(self, variant, wall_env):
        planner = make_planner(variant, wall_env)
        path_a = planner.plan((2.0, 2.0), (18.0, 2.0))
        nodes_a = planner.node_count
        path_b = planner.plan((2.0, 2.0), (18.0, 2.0))
        assert path_a == path_b
        assert planner.node_count == nodes_a

    def test_explicit_generator_matches_seed(self, variant, wall_env):
        seeded = make_planner(variant, wall_env, random_seed=11)
        unseeded = make_planner(variant, wall_env, random_seed=None)
        path_a = seeded.plan((2.0, 2.0), (18.0, 2.0))
        path_b = unseeded.plan((2.0, 2.0), (18.0, 2.0), rng=np.random.default_rng(11))
        assert path_a == path_b

    def test_unreachable_goal_exhausts_iterations(self, variant, enclosed_goal_env):
        planner = make_planner(variant, enclosed_goal_env, max_iterations=300)
        calls = []
        path = planner.plan((1.0, 1.0), (8.0, 8.0),
                            progress_callback=lambda i, n: calls.append(i))
        assert path is None
        assert planner.path is None
        assert planner.iterations == 300
        assert calls == list(range(1, 301))
        metrics = planner.get_metrics()
        assert metrics['path_exists'] is False
        assert metrics['nodes_explored'] == planner.node_count >= 1

    def test_start_equals_goal(self, variant, open_field):
        planner = make_planner(variant, open_field)
        path = planner.plan((3.0, 3.0), (3.0, 3.0))
        assert path is not None
        assert 1 <= len(path) <= 2
        assert all(p == (3.0, 3.0) for p in path)
        assert planner.iterations == 0

    def test_goal_cost_matches_raw_path_length(self, variant, wall_env):
        planner = make_planner(variant, wall_env)
        planner.plan((2.0, 2.0), (18.0, 2.0))
        assert planner.goal_cost == pytest.approx(path_length(planner.raw_path))

    def test_progress_callback_does_not_change_outcome(self, variant, wall_env):
        quiet = make_planner(variant, wall_env)
        observed = make_planner(variant, wall_env)
        seen = []
        path_a = quiet.plan((2.0, 2.0), (18.0, 2.0))
        path_b = observed.plan((2.0, 2.0), (18.0, 2.0),
                               progress_callback=lambda i, n: seen.append((i, n)))
        assert path_a == path_b
        assert seen and seen[-1][0] == observed.iterations


class TestSingleTree:

    def test_goal_is_a_tree_node(self, wall_env):
        planner = make_planner(Variant.RRT, wall_env)
        path = planner.plan((2.0, 2.0), (18.0, 2.0))
        goal_node = planner.start_tree[planner.goal_index]
        assert goal_node.position == (18.0, 2.0)
        assert planner.start_tree.path_to_root(planner.goal_index)[::-1] == path
        assert planner.goal_tree is None
        assert planner.tree_sizes == {'start_tree': len(planner.start_tree)}


class TestRRTStar:

    def test_goal_cost_not_worse_than_rrt(self, open_field):
        rrt = make_planner(Variant.RRT, open_field, random_seed=3)
        rrt_star = make_planner(Variant.RRT_STAR, open_field, random_seed=3, search_radius=25.0)
        assert rrt.plan((0.0, 0.0), (10.0, 0.0)) is not None
        assert rrt_star.plan((0.0, 0.0), (10.0, 0.0)) is not None
        assert rrt_star.goal_cost == pytest.approx(10.0)
        assert rrt_star.goal_cost <= rrt.get_path_length() + 1e-9

    def test_goal_cost_history_non_increasing(self, wall_env):
        planner = make_planner(Variant.RRT_STAR, wall_env, max_iterations=1500,
                               search_radius=3.0, search_until_max_iterations=True)
        path = planner.plan((2.0, 2.0), (18.0, 2.0))
        assert path is not None
        assert planner.iterations == 1500
        history = planner.goal_cost_history
        assert history
        assert all(b < a for a, b in zip(history, history[1:]))
        assert planner.goal_cost == pytest.approx(history[-1])
        assert planner.goal_cost == pytest.approx(path_length(path))
        assert planner.get_metrics()['goal_cost_history'] == history
        assert_tree_invariants(planner)

    def test_stops_at_first_solution_by_default(self, wall_env):
        planner = make_planner(Variant.RRT_STAR, wall_env)
        planner.plan((2.0, 2.0), (18.0, 2.0))
        assert planner.iterations < 5000
        assert len(planner.goal_cost_history) == 1


class TestBidirectional:

    def test_tree_split(self, wall_env):
        planner = make_planner(Variant.RRT_CONNECT, wall_env)
        planner.plan((2.0, 2.0), (18.0, 2.0))
        sizes = planner.tree_sizes
        assert set(sizes) == {'start_tree', 'goal_tree'}
        assert sum(sizes.values()) == planner.node_count
        assert planner.start_tree.root.position == (2.0, 2.0)
        assert planner.goal_tree.root.position == (18.0, 2.0)
        metrics = planner.get_metrics()
        assert metrics['start_tree_size'] + metrics['goal_tree_size'] == metrics['nodes_explored']

    def test_junction_gap_within_half_step(self, wall_env):
        planner = make_planner(Variant.RRT_CONNECT, wall_env)
        planner.plan((2.0, 2.0), (18.0, 2.0))
        start_index, goal_index = planner.connection
        gap = math.dist(planner.start_tree.position(start_index),
                        planner.goal_tree.position(goal_index))
        assert gap < 0.5 * planner.step_size

    def test_star_connect_carries_costs(self, wall_env):
        planner = make_planner(Variant.RRT_STAR_CONNECT, wall_env)
        planner.plan((2.0, 2.0), (18.0, 2.0))
        assert_tree_invariants(planner)
        goal_index = planner.connection[1]
        assert planner.goal_tree[goal_index].cost == pytest.approx(
            path_length(planner.goal_tree.path_to_root(goal_index)))


class TestShortcutVariant:

    def test_shortcut_not_longer_than_raw(self, wall_env):
        planner = make_planner(Variant.RRT_CONNECT_SHORTCUT, wall_env)
        path = planner.plan((2.0, 2.0), (18.0, 2.0))
        assert path_length(path) <= path_length(planner.raw_path)
        assert len(path) <= len(planner.raw_path)
        metrics = planner.get_metrics()
        assert metrics['raw_waypoints'] == len(planner.raw_path)
        assert metrics['shortening_percent'] >= 0.0

    def test_same_raw_path_as_rrt_connect(self, wall_env):
        connect = make_planner(Variant.RRT_CONNECT, wall_env)
        shortcut = make_planner(Variant.RRT_CONNECT_SHORTCUT, wall_env)
        connect.plan((2.0, 2.0), (18.0, 2.0))
        shortcut.plan((2.0, 2.0), (18.0, 2.0))
        assert connect.path == shortcut.raw_path


class TestMetricsAndPersistence:

    def test_metrics_keys(self, wall_env):
        planner = make_planner(Variant.RRT, wall_env)
        planner.plan((2.0, 2.0), (18.0, 2.0))
        metrics = planner.get_metrics()
        for key in ('algorithm', 'path_length', 'planning_time', 'nodes_explored',
                    'tree_size', 'goal_reached', 'path_exists', 'iterations', 'waypoints'):
            assert key in metrics
        assert metrics['algorithm'] == 'RRT'
        assert metrics['path_length'] == pytest.approx(planner.get_path_length())

    def test_save_and_load_json(self, wall_env, tmp_path):
        planner = make_planner(Variant.RRT_CONNECT, wall_env)
        path = planner.plan((2.0, 2.0), (18.0, 2.0))
        filename = tmp_path / 'path.json'
        planner.save_path(str(filename))
        data = json.loads(filename.read_text())
        assert data['metrics']['algorithm'] == 'RRT-Connect'
        assert planner.load_path(str(filename)) == path

    def test_save_and_load_csv(self, wall_env, tmp_path):
        planner = make_planner(Variant.RRT, wall_env)
        path = planner.plan((2.0, 2.0), (18.0, 2.0))
        filename = tmp_path / 'path.csv'
        planner.save_path(str(filename))
        np.testing.assert_array_almost_equal(planner.load_path(str(filename)), path)

    def test_save_without_path(self, open_field, tmp_path):
        planner = make_planner(Variant.RRT, open_field)
        with pytest.raises(ValueError):
            planner.save_path(str(tmp_path / 'path.json'))

    def test_unsupported_format(self, wall_env, tmp_path):
        planner = make_planner(Variant.RRT, wall_env)
        planner.plan((2.0, 2.0), (18.0, 2.0))
        with pytest.raises(ValueError):
            planner.save_path(str(tmp_path / 'path.txt'))
        with pytest.raises(ValueError):
            planner.load_path(str(tmp_path / 'path.txt'))
