"""
Labeled directed multigraph used by the graph search.

Every resource is a node. A fact between two resources is an edge labeled by
its predicate; a fact with a literal object is a self-loop on the subject
labeled by (predicate, literal). Parallel edges between the same pair of
nodes are kept apart, but the search compares them as sets of labels.
"""

from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Set, Tuple

from rdflib.term import Literal, Node, URIRef

from refgen.store.base import FactStore, Triple, is_literal, local_name


class EdgeLabel(NamedTuple):
    predicate: URIRef
    value: Optional[Literal] = None

    @property
    def name(self) -> str:
        return local_name(self.predicate)


class Edge(NamedTuple):
    source: Node
    label: EdgeLabel
    target: Node

    @property
    def is_loop(self) -> bool:
        return self.source == self.target

    def to_triple(self) -> Triple:
        obj = self.label.value if self.label.value is not None else self.target
        return Triple(self.source, self.label.predicate, obj)


def edge_for(fact: Triple) -> Edge:
    if is_literal(fact.object):
        return Edge(fact.subject, EdgeLabel(fact.predicate, fact.object), fact.subject)
    return Edge(fact.subject, EdgeLabel(fact.predicate), fact.object)


class RelationGraph:
    """The full graph over a referent, its confusors and their neighbors."""

    def __init__(self):
        self.nodes: Dict[Node, None] = {}
        self.edges: Dict[Edge, None] = {}
        self._labels: Dict[Tuple[Node, Node], Set[EdgeLabel]] = defaultdict(set)
        self._outgoing: Dict[Node, List[Edge]] = defaultdict(list)
        self._incoming: Dict[Node, List[Edge]] = defaultdict(list)

    @classmethod
    def build(
        cls, store: FactStore, entities: Iterable[Node], ignored: AbstractSet[str] = frozenset()
    ) -> "RelationGraph":
        """
        Collect every fact in which one of the entities is subject or object.

        Facts whose predicate local name is in ``ignored`` are left out.
        """
        graph = cls()
        entities = list(dict.fromkeys(entities))
        for entity in entities:
            graph.add_node(entity)
        for entity in entities:
            for fact in store.statements(entity, None, None):
                if local_name(fact.predicate) not in ignored:
                    graph.add_fact(fact)
            for fact in store.statements(None, None, entity):
                if local_name(fact.predicate) not in ignored:
                    graph.add_fact(fact)
        return graph

    def add_node(self, node: Node) -> None:
        self.nodes.setdefault(node, None)

    def add_fact(self, fact: Triple) -> Optional[Edge]:
        """Add a fact as an edge; returns None if it was already there."""
        edge = edge_for(Triple(*fact))
        if edge in self.edges:
            return None
        self.edges[edge] = None
        self.add_node(edge.source)
        self.add_node(edge.target)
        self._labels[(edge.source, edge.target)].add(edge.label)
        self._outgoing[edge.source].append(edge)
        if not edge.is_loop:
            self._incoming[edge.target].append(edge)
        return edge

    def labels(self, source: Node, target: Node) -> FrozenSet[EdgeLabel]:
        return frozenset(self._labels.get((source, target), ()))

    def outgoing(self, node: Node) -> List[Edge]:
        """Edges leaving the node, self-loops included."""
        return list(self._outgoing.get(node, ()))

    def incoming(self, node: Node) -> List[Edge]:
        return list(self._incoming.get(node, ()))

    def __len__(self) -> int:
        return len(self.edges)


@dataclass(frozen=True)
class Subgraph:
    """
    A connected part of the relation graph grown from the referent.

    Cost is the number of nodes plus the number of edges.
    """

    referent: Node
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...] = ()
    _labels: Dict[Tuple[Node, Node], FrozenSet[EdgeLabel]] = field(
        default=None, init=False, compare=False, repr=False
    )

    def __post_init__(self):
        labels: Dict[Tuple[Node, Node], Set[EdgeLabel]] = defaultdict(set)
        for edge in self.edges:
            labels[(edge.source, edge.target)].add(edge.label)
        object.__setattr__(self, "_labels", {k: frozenset(v) for k, v in labels.items()})

    @classmethod
    def start(cls, referent: Node) -> "Subgraph":
        return cls(referent, (referent,))

    @property
    def cost(self) -> int:
        return len(self.nodes) + len(self.edges)

    @property
    def edge_set(self) -> FrozenSet[Edge]:
        return frozenset(self.edges)

    def with_edge(self, edge: Edge) -> "Subgraph":
        nodes = list(self.nodes)
        for node in (edge.source, edge.target):
            if node not in nodes:
                nodes.append(node)
        return Subgraph(self.referent, tuple(nodes), self.edges + (edge,))

    def labels(self, source: Node, target: Node) -> FrozenSet[EdgeLabel]:
        return self._labels.get((source, target), frozenset())

    def bfs_order(self) -> List[Node]:
        """Nodes in breadth-first order from the referent, following edges both ways."""
        neighbors: Dict[Node, List[Node]] = defaultdict(list)
        for edge in self.edges:
            if edge.is_loop:
                continue
            neighbors[edge.source].append(edge.target)
            neighbors[edge.target].append(edge.source)

        order = [self.referent]
        seen = {self.referent}
        queue = deque([self.referent])
        while queue:
            node = queue.popleft()
            for neighbor in neighbors[node]:
                if neighbor not in seen:
                    seen.add(neighbor)
                    order.append(neighbor)
                    queue.append(neighbor)
        return order
