"""Evaluation ordering between subprojects."""

import graphlib
import logging
from typing import Dict, List, Set

from buildconf.errors import ConfigError, CycleError
from buildconf.models import SubprojectRef

logger = logging.getLogger(__name__)


class EvaluationGraph:
    """Directed graph of "evaluate after" edges between subprojects.

    An edge ``dependent -> dependency`` means ``dependent`` is configured
    after ``dependency``. The graph is kept acyclic: an edge that would
    close a cycle is rejected and the graph is left unchanged.
    """

    def __init__(self) -> None:
        # Insertion-ordered; declaration order breaks ties in evaluation_order()
        self._edges: Dict[str, Set[str]] = {}

    def add_subproject(self, name: str) -> None:
        self._edges.setdefault(name, set())

    def __contains__(self, name: object) -> bool:
        return name in self._edges

    @property
    def subprojects(self) -> List[str]:
        return list(self._edges)

    def set_evaluation_order(self, dependent: str, dependency: str) -> None:
        """Record that ``dependent`` must be configured after ``dependency``.

        Raises:
            ConfigError: If either subproject is unknown
            CycleError: If the edge would introduce a cycle
        """
        for name in (dependent, dependency):
            if name not in self._edges:
                raise ConfigError(
                    f"Unknown subproject in evaluation order: {name}",
                    dependent=dependent,
                    dependency=dependency,
                )

        if dependent == dependency:
            raise CycleError(
                f"Subproject cannot evaluate after itself: {dependent}",
                cycle=[dependent, dependent],
                dependent=dependent,
                dependency=dependency,
            )
        if dependency in self._edges[dependent]:
            return

        self._edges[dependent].add(dependency)
        try:
            graphlib.TopologicalSorter(self._edges).prepare()
        except graphlib.CycleError as e:
            self._edges[dependent].discard(dependency)
            cycle = list(e.args[1])
            raise CycleError(
                f"Evaluation order cycle: {' -> '.join(cycle)}",
                cycle=cycle,
                dependent=dependent,
                dependency=dependency,
            ) from e

        logger.debug(f"{dependent} evaluates after {dependency}")

    def copy(self) -> "EvaluationGraph":
        graph = EvaluationGraph()
        graph._edges = {name: set(deps) for name, deps in self._edges.items()}
        return graph

    def dependencies_of(self, name: str) -> frozenset[str]:
        return frozenset(self._edges[name])

    def refs(self) -> List[SubprojectRef]:
        return [
            SubprojectRef(name=name, depends_on_evaluation_of=frozenset(deps))
            for name, deps in self._edges.items()
        ]

    def evaluation_order(self) -> List[str]:
        """Return subprojects with every dependency before its dependents.

        Among subprojects that are ready at the same time, declaration
        order wins, so the result is stable across calls.
        """
        position = {name: index for index, name in enumerate(self._edges)}
        sorter = graphlib.TopologicalSorter(self._edges)
        sorter.prepare()

        order: List[str] = []
        while sorter.is_active():
            ready = sorted(sorter.get_ready(), key=position.__getitem__)
            order.extend(ready)
            sorter.done(*ready)
        return order
