"""Fact stores: the interface and its rdflib / Neo4j implementations."""

from refgen.store.base import (
    FactStore,
    OverlayFactStore,
    Triple,
    has_statement,
    is_literal,
    local_name,
)
from refgen.store.neo4j_store import Neo4jFactStore
from refgen.store.rdf_store import RdfFactStore

__all__ = [
    "FactStore",
    "Triple",
    "OverlayFactStore",
    "RdfFactStore",
    "Neo4jFactStore",
    "has_statement",
    "is_literal",
    "local_name",
]
