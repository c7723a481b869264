"""
Fact store interface.

A fact store is any object answering wildcard triple lookups. Entities are
rdflib terms: ``URIRef`` and ``BNode`` are resources (subjects or objects),
``Literal`` is a value (object only).
"""

from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple, Optional, Protocol

from rdflib.term import Literal, Node, URIRef


class Triple(NamedTuple):
    """A single (subject, predicate, object) fact."""

    subject: Node
    predicate: URIRef
    object: Node


class FactStore(Protocol):
    """Read-only triple lookup; any argument left as None is a wildcard."""

    def statements(
        self,
        subject: Optional[Node] = None,
        predicate: Optional[URIRef] = None,
        object: Optional[Node] = None,
    ) -> Iterable[Triple]: ...


def is_literal(term: Node) -> bool:
    """Literal values can only appear as objects."""
    return isinstance(term, Literal)


def local_name(term: Node) -> str:
    """
    Local part of a URI.

    The part after the first '#', otherwise after the last '/', otherwise
    after the last ':'. Priority lists are keyed by these names.
    """
    value = str(term)
    idx = value.find("#")
    if idx < 0:
        idx = value.rfind("/")
    if idx < 0:
        idx = value.rfind(":")
    return value[idx + 1 :]


def has_statement(store: FactStore, subject: Node, predicate: URIRef, obj: Node) -> bool:
    """True if the exact fact is in the store."""
    return next(iter(store.statements(subject, predicate, obj)), None) is not None


class OverlayFactStore:
    """
    A store plus a few extra facts layered on top.

    The base store is never written to; extra facts only exist for the
    lifetime of the overlay.
    """

    def __init__(self, base: FactStore, extra: Iterable[Triple] = ()):
        self.base = base
        self.extra = list(dict.fromkeys(Triple(*t) for t in extra))

    def add(self, subject: Node, predicate: URIRef, obj: Node) -> None:
        fact = Triple(subject, predicate, obj)
        if fact not in self.extra:
            self.extra.append(fact)

    def statements(
        self,
        subject: Optional[Node] = None,
        predicate: Optional[URIRef] = None,
        object: Optional[Node] = None,
    ) -> Iterator[Triple]:
        seen = set()
        for fact in self.base.statements(subject, predicate, object):
            seen.add(fact)
            yield fact
        for fact in self.extra:
            if fact in seen:
                continue
            if subject is not None and fact.subject != subject:
                continue
            if predicate is not None and fact.predicate != predicate:
                continue
            if object is not None and fact.object != object:
                continue
            yield fact
