"""
Description selection algorithms.

All three share the ``resolve(referent, confusors, store)`` contract and are
looked up by name through ``create_algorithm``.
"""

from typing import Dict, Type

from refgen.algorithms.base import ReferringExpressionAlgorithm
from refgen.algorithms.budget import Deadline
from refgen.algorithms.constraint import ConstraintSelector
from refgen.algorithms.graph import GraphSearchSelector
from refgen.algorithms.incremental import IncrementalSelector
from refgen.algorithms.matching import StructureMatcher
from refgen.algorithms.relation_graph import Edge, EdgeLabel, RelationGraph, Subgraph
from refgen.priorities import PriorityConfig

ALGORITHMS: Dict[str, Type[ReferringExpressionAlgorithm]] = {
    IncrementalSelector.name: IncrementalSelector,
    ConstraintSelector.name: ConstraintSelector,
    GraphSearchSelector.name: GraphSearchSelector,
}

_OPTIONS = {
    IncrementalSelector.name: ("max_predicates",),
    ConstraintSelector.name: ("max_size",),
    GraphSearchSelector.name: ("timeout_ms",),
}


def create_algorithm(name: str, config: PriorityConfig, **options) -> ReferringExpressionAlgorithm:
    """
    Build a selector by registry name.

    Options a selector does not take are dropped, so a caller can pass every
    option it knows about (None means "use the default").

    Raises:
        ValueError: If the name is not registered
    """
    try:
        algorithm_class = ALGORITHMS[name]
    except KeyError:
        raise ValueError(
            f"Unknown algorithm '{name}', expected one of {sorted(ALGORITHMS)}"
        ) from None
    kwargs = {k: v for k, v in options.items() if k in _OPTIONS[name] and v is not None}
    return algorithm_class(config, **kwargs)


__all__ = [
    "ALGORITHMS",
    "ReferringExpressionAlgorithm",
    "IncrementalSelector",
    "ConstraintSelector",
    "GraphSearchSelector",
    "StructureMatcher",
    "RelationGraph",
    "Subgraph",
    "Edge",
    "EdgeLabel",
    "Deadline",
    "create_algorithm",
]
