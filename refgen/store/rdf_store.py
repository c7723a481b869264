"""
In-memory fact store backed by an rdflib Graph.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from rdflib import Graph
from rdflib.term import Node, URIRef

from refgen.constants import DEFAULT_RDF_FORMAT
from refgen.store.base import Triple

logger = logging.getLogger(__name__)


class RdfFactStore:
    """Fact store over an rdflib ``Graph``."""

    def __init__(self, graph: Optional[Graph] = None):
        self.graph = graph if graph is not None else Graph()

    @classmethod
    def from_triples(cls, triples: Iterable[tuple]) -> "RdfFactStore":
        store = cls()
        for subject, predicate, obj in triples:
            store.add(subject, predicate, obj)
        return store

    @classmethod
    def load(cls, path: Union[str, Path], rdf_format: str = DEFAULT_RDF_FORMAT) -> "RdfFactStore":
        """
        Parse an RDF file into a new store.

        Args:
            path: File to parse
            rdf_format: Any rdflib parser name (default N-Triples)

        Returns:
            Populated store
        """
        graph = Graph()
        graph.parse(str(path), format=rdf_format)
        logger.debug(f"Loaded {len(graph)} facts from {path}")
        return cls(graph)

    def add(self, subject: Node, predicate: URIRef, obj: Node) -> None:
        self.graph.add((subject, predicate, obj))

    def __len__(self) -> int:
        return len(self.graph)

    def statements(
        self,
        subject: Optional[Node] = None,
        predicate: Optional[URIRef] = None,
        object: Optional[Node] = None,
    ) -> Iterator[Triple]:
        for s, p, o in self.graph.triples((subject, predicate, object)):
            yield Triple(s, p, o)
