"""
dependencies/graph.py - Dependency graph inspection

Builds a networkx DiGraph of observables for debugging and tooling.
Edges point from a dependency to the computed/molecule that reads it.

Atoms do not know who depends on them, so graphs are always built by walking
down from the observables given as roots.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Set, Tuple

import networkx as nx

from atomstate.core import Atom, Computed, Molecule, Observable


def _dependencies_of(observable: Any) -> List[Tuple[Any, Any]]:
    """(name, dependency) pairs of a computed; atoms have none."""
    if not isinstance(observable, Computed):
        return []
    dependencies = observable.dependencies
    if hasattr(dependencies, "items"):
        return list(dependencies.items())
    return list(enumerate(dependencies))


def _kind(observable: Any) -> str:
    if isinstance(observable, Molecule):
        return "molecule"
    if isinstance(observable, Computed):
        return "computed"
    if isinstance(observable, Atom):
        return "atom"
    return type(observable).__name__


def build_dependency_graph(*observables: Observable) -> nx.DiGraph:
    """
    Walk the dependencies of observables into a directed graph.

    Args:
        observables: Roots to start from

    Returns:
        DiGraph whose nodes are observables (attribute ``kind``) and whose
        edges run dependency -> dependent (attribute ``name``: the key or
        index the dependent reads it under)
    """
    graph = nx.DiGraph()
    seen: Set[int] = set()
    stack = list(observables)

    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        graph.add_node(node, kind=_kind(node))

        for name, dependency in _dependencies_of(node):
            graph.add_node(dependency, kind=_kind(dependency))
            graph.add_edge(dependency, node, name=name)
            stack.append(dependency)

    return graph


def upstream(observable: Observable) -> Set[Observable]:
    """Every observable that observable transitively depends on."""
    graph = build_dependency_graph(observable)
    return set(nx.ancestors(graph, observable))


def dependents(target: Observable, roots: Iterable[Observable]) -> Set[Observable]:
    """Observables among roots (and their dependencies) that transitively read target."""
    graph = build_dependency_graph(*roots)
    if target not in graph:
        return set()
    return set(nx.descendants(graph, target))


def evaluation_order(*observables: Observable) -> List[Observable]:
    """Observables reachable from the roots, dependencies first."""
    return list(nx.topological_sort(build_dependency_graph(*observables)))
