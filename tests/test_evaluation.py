"""Tests for evaluation ordering."""

import itertools

import pytest

from buildconf.errors import ConfigError, CycleError
from buildconf.evaluation import EvaluationGraph


def make_graph(*names):
    graph = EvaluationGraph()
    for name in names:
        graph.add_subproject(name)
    return graph


class TestSetEvaluationOrder:
    """Tests for EvaluationGraph.set_evaluation_order."""

    def test_records_dependency(self):
        graph = make_graph("app", "camera")
        graph.set_evaluation_order("camera", "app")

        assert graph.dependencies_of("camera") == frozenset({"app"})
        assert graph.dependencies_of("app") == frozenset()

    def test_repeated_edge_is_noop(self):
        graph = make_graph("app", "camera")
        graph.set_evaluation_order("camera", "app")
        graph.set_evaluation_order("camera", "app")

        assert graph.evaluation_order() == ["app", "camera"]

    def test_unknown_subproject(self):
        graph = make_graph("app")
        with pytest.raises(ConfigError, match="Unknown subproject"):
            graph.set_evaluation_order("camera", "app")

    def test_self_edge_is_cycle(self):
        graph = make_graph("app")
        with pytest.raises(CycleError) as exc_info:
            graph.set_evaluation_order("app", "app")
        assert exc_info.value.cycle == ("app", "app")

    def test_two_node_cycle(self):
        graph = make_graph("app", "camera")
        graph.set_evaluation_order("camera", "app")

        with pytest.raises(CycleError):
            graph.set_evaluation_order("app", "camera")

    def test_graph_unchanged_after_cycle(self):
        graph = make_graph("app", "camera", "billing")
        graph.set_evaluation_order("camera", "app")
        graph.set_evaluation_order("billing", "camera")

        with pytest.raises(CycleError) as exc_info:
            graph.set_evaluation_order("app", "billing")

        assert set(exc_info.value.cycle) == {"app", "camera", "billing"}
        assert graph.dependencies_of("app") == frozenset()
        assert graph.evaluation_order() == ["app", "camera", "billing"]

    @pytest.mark.parametrize("size", [2, 3, 5])
    def test_any_edge_order_of_a_ring_raises(self, size):
        names = [f"m{i}" for i in range(size)]
        ring = [(names[i], names[(i + 1) % size]) for i in range(size)]

        for edges in itertools.permutations(ring):
            graph = make_graph(*names)
            with pytest.raises(CycleError):
                for dependent, dependency in edges:
                    graph.set_evaluation_order(dependent, dependency)


class TestEvaluationOrder:
    """Tests for EvaluationGraph.evaluation_order."""

    def test_dependencies_come_first(self):
        graph = make_graph("billing", "camera", "app")
        graph.set_evaluation_order("billing", "camera")
        graph.set_evaluation_order("camera", "app")

        assert graph.evaluation_order() == ["app", "camera", "billing"]

    def test_declaration_order_breaks_ties(self):
        graph = make_graph("app", "zeta", "alpha", "mid")
        for name in ("zeta", "alpha", "mid"):
            graph.set_evaluation_order(name, "app")

        assert graph.evaluation_order() == ["app", "zeta", "alpha", "mid"]

    def test_stable_across_calls(self):
        graph = make_graph("app", "camera", "billing")
        graph.set_evaluation_order("billing", "app")

        assert graph.evaluation_order() == graph.evaluation_order()

    def test_copy_is_independent(self):
        graph = make_graph("app", "camera")
        clone = graph.copy()
        clone.set_evaluation_order("camera", "app")

        assert graph.dependencies_of("camera") == frozenset()

    def test_refs(self):
        graph = make_graph("app", "camera")
        graph.set_evaluation_order("camera", "app")

        refs = {ref.name: ref for ref in graph.refs()}
        assert refs["camera"].depends_on_evaluation_of == frozenset({"app"})
