"""
dependencies/ - Dependency Graph Inspection

Provides:
- build_dependency_graph: networkx DiGraph of observables
- upstream / dependents: transitive reads in either direction
- evaluation_order: dependencies-first ordering
"""

from .graph import (
    build_dependency_graph,
    upstream,
    dependents,
    evaluation_order,
)

__all__ = [
    "build_dependency_graph",
    "upstream",
    "dependents",
    "evaluation_order",
]
