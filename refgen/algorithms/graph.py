"""
Graph based algorithm (Krahmer, van Erk & Verleg, 2003).

The referent, its confusors and everything they are linked to form one
labeled directed graph. Starting from the referent alone, a candidate
subgraph is grown one incident edge at a time; a candidate that cannot be
laid over any other node is a distinguishing description. Branch and bound
keeps the cheapest one, where cost is nodes plus edges.

Expansion order only decides which of several equally cheap descriptions is
found first: edges leaving the candidate before edges entering it, then the
referent type's priority order (when the referent has a prioritized type),
then lexical order.

Reference:
    Krahmer, E., van Erk, S. and Verleg, A. (2003). Graph-based generation of
    referring expressions. Computational Linguistics 29(1), 53-72.
"""

from __future__ import annotations

import logging
import math
from typing import List, NamedTuple, Optional, Sequence, Set, FrozenSet

from rdflib.term import Node

from refgen.algorithms.base import ReferringExpressionAlgorithm
from refgen.algorithms.budget import Deadline
from refgen.algorithms.context import (
    TypeSelection,
    collect_confusor_facts,
    prepare_confusors,
    scan_types,
)
from refgen.algorithms.matching import StructureMatcher
from refgen.algorithms.relation_graph import Edge, RelationGraph, Subgraph
from refgen.config import get_graph_timeout_ms
from refgen.constants import INVERSE_SUFFIX
from refgen.errors import RemainingConfusorsUnresolved
from refgen.expression import ReferringExpression
from refgen.priorities import PriorityConfig
from refgen.store.base import FactStore

logger = logging.getLogger(__name__)


class SearchResult(NamedTuple):
    """Best solution so far, threaded through the recursion."""

    best: Optional[Subgraph] = None
    cost: float = math.inf
    explored: int = 0


class GraphSearchSelector(ReferringExpressionAlgorithm):
    """
    Cheapest distinguishing subgraph by branch and bound.

    Unlike the other selectors, a referent without a type, or whose types
    have no priority list, is not an error: UnknownReferentType and
    NoPrioritiesForType are never raised, and the search simply runs
    without priority ordering or ignore lists.
    """

    name = "graph"

    def __init__(self, config: Optional[PriorityConfig] = None, timeout_ms: Optional[int] = None):
        """
        Args:
            config: Priorities used to order the search and ignore lists used
                to drop predicates (optional)
            timeout_ms: Wall-clock budget (defaults to REFGEN_GRAPH_TIMEOUT_MS,
                60000)
        """
        self.config = config or PriorityConfig()
        self.timeout_ms = timeout_ms if timeout_ms is not None else get_graph_timeout_ms()

    def resolve(
        self, referent: Node, confusors: Sequence[Node], store: FactStore
    ) -> ReferringExpression:
        selection, _ = scan_types(referent, store, self.config)
        if selection is not None:
            logger.debug(f"Ordering search by priorities of type '{selection.type_name}'")
        ignored = selection.ignored if selection is not None else frozenset()

        confusors = prepare_confusors(referent, confusors)
        collect_confusor_facts(store, confusors)

        deadline = Deadline(self.timeout_ms)
        graph = RelationGraph.build(store, [referent, *confusors], ignored)
        logger.debug(f"Relation graph: {len(graph.nodes)} nodes, {len(graph)} edges")

        search = _Search(referent, graph, StructureMatcher(graph, deadline), deadline, selection)
        result = search.run()
        logger.debug(
            f"Explored {result.explored} candidates in {deadline.elapsed_ms():.0f} ms, "
            f"best cost {result.cost}"
        )
        if result.best is None:
            raise RemainingConfusorsUnresolved(referent, confusors)

        expression = ReferringExpression(referent)
        for edge in result.best.edges:
            expression.add_statement(edge.to_triple())
        return expression


class _Search:
    """One branch and bound run over a fixed graph."""

    def __init__(
        self,
        referent: Node,
        graph: RelationGraph,
        matcher: StructureMatcher,
        deadline: Deadline,
        selection: Optional[TypeSelection],
    ):
        self.referent = referent
        self.graph = graph
        self.matcher = matcher
        self.deadline = deadline
        self.selection = selection

    def run(self) -> SearchResult:
        return self._search(Subgraph.start(self.referent), SearchResult(), set())

    def _search(
        self, candidate: Subgraph, result: SearchResult, visited: Set[FrozenSet[Edge]]
    ) -> SearchResult:
        self.deadline.check()
        result = result._replace(explored=result.explored + 1)
        if result.cost <= candidate.cost:
            return result

        if not self._has_distractor(candidate):
            logger.debug(f"Solution of cost {candidate.cost}: {list(candidate.edges)}")
            return SearchResult(candidate, candidate.cost, result.explored)

        for edge in self._expansions(candidate):
            self.deadline.check()
            extended = candidate.with_edge(edge)
            key = extended.edge_set
            if key in visited:
                continue
            visited.add(key)
            if result.cost <= extended.cost:
                continue
            result = self._search(extended, result, visited)
        return result

    def _has_distractor(self, candidate: Subgraph) -> bool:
        for node in self.graph.nodes:
            self.deadline.check()
            if self.matcher.is_distractor(candidate, node):
                return True
        return False

    def _expansions(self, candidate: Subgraph) -> List[Edge]:
        """Full graph edges touching the candidate and not yet in it, in visiting order."""
        present = set(candidate.edges)
        found = {}
        for node in candidate.nodes:
            for edge in self.graph.outgoing(node):
                if edge not in present:
                    found.setdefault(edge, 0)
        for node in candidate.nodes:
            for edge in self.graph.incoming(node):
                if edge not in present:
                    found.setdefault(edge, 1)
        return sorted(found, key=lambda edge: self._order_key(edge, found[edge]))

    def _order_key(self, edge: Edge, direction: int):
        name = edge.label.name
        key_name = name + INVERSE_SUFFIX if direction else name
        rank = None
        if self.selection is not None:
            rank = self.selection.rank(key_name)
        if rank is None:
            rank = math.inf
        return (
            direction,
            rank,
            name,
            str(edge.label.predicate),
            "" if edge.label.value is None else str(edge.label.value),
            str(edge.source),
            str(edge.target),
        )
