"""DependencyGraph – NetworkX-backed graph of components and ``requires`` edges."""

from __future__ import annotations

import logging
from typing import Iterable

import networkx as nx

from swcity.model.model import Component

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Directed multigraph where nodes are component names and every
    ``requires`` entry is one edge from the requiring component to the
    required one.

    Parallel edges are preserved so duplicate ``requires`` entries stay
    visible to callers.  References to names that are not components are
    kept aside as unresolved instead of becoming nodes.
    """

    def __init__(self) -> None:
        self._g: nx.MultiDiGraph = nx.MultiDiGraph()
        self._edges: list[tuple[str, str]] = []
        self._unresolved: list[tuple[str, str]] = []

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def add_component(self, component: Component) -> None:
        if component.name in self._g.nodes:
            raise ValueError(f"Component '{component.name}' is defined more than once.")
        self._g.add_node(component.name, component=component)

    def add_dependency(self, source: str, target: str) -> None:
        if source not in self._g.nodes:
            raise ValueError(f"Component '{source}' is not defined.")
        self._edges.append((source, target))
        if target not in self._g.nodes:
            logger.debug("Component '%s' requires unknown component '%s'", source, target)
            self._unresolved.append((source, target))
            return
        self._g.add_edge(source, target)

    # ------------------------------------------------------------------ #
    # Query helpers
    # ------------------------------------------------------------------ #

    @property
    def components(self) -> list[Component]:
        return [data["component"] for _, data in self._g.nodes(data=True)]

    def get_component(self, name: str) -> Component:
        return self._g.nodes[name]["component"]

    def __contains__(self, name: str) -> bool:
        return name in self._g.nodes

    def __len__(self) -> int:
        return len(self._g.nodes)

    def dependency_edges(self) -> list[tuple[str, str]]:
        """All authored edges in authoring order, resolved or not."""
        return list(self._edges)

    def resolved_edges(self) -> list[tuple[str, str]]:
        return [(u, v) for u, v in self._edges if v in self._g.nodes]

    def unresolved_references(self) -> list[tuple[str, str]]:
        return list(self._unresolved)

    def self_references(self) -> list[str]:
        return [name for name in self._g.nodes if self._g.has_edge(name, name)]

    def duplicate_edges(self) -> list[tuple[str, str]]:
        """Return each (source, target) pair that occurs more than once."""
        return [
            (u, v)
            for u, v in dict.fromkeys(self.resolved_edges())
            if self._g.number_of_edges(u, v) > 1
        ]

    def dependencies_of(self, name: str) -> list[str]:
        return list(dict.fromkeys(self._g.successors(name)))

    def dependents_of(self, name: str) -> list[str]:
        return list(dict.fromkeys(self._g.predecessors(name)))

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def validate(self) -> list[str]:
        """Return a list of graph-level error messages (empty = OK)."""
        errors: list[str] = []
        if len(self._g.nodes) == 0:
            errors.append("No components defined.")
        for source, target in self._unresolved:
            errors.append(f"Component '{source}' requires unknown component '{target}'.")
        return errors

    # ------------------------------------------------------------------ #
    # Factory
    # ------------------------------------------------------------------ #

    @classmethod
    def from_components(cls, components: Iterable[Component]) -> "DependencyGraph":
        g = cls()
        added: list[Component] = []
        for c in components:
            try:
                g.add_component(c)
            except ValueError as exc:
                logger.warning("Skipping duplicate component: %s", exc)
                continue
            added.append(c)
        for c in added:
            for target in c.requires:
                g.add_dependency(c.name, target)
        return g
