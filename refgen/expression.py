"""
Referring expressions.

A referring expression is an ordered list of signed fact templates. A
template leaves the subject and/or object empty (None) to mean "the entity
being tested"; a positive template holds for a candidate when the store has
at least one matching fact, a negative one when it has none.

The referent is only needed while the expression is being built (facts about
the referent are turned into templates); it is not part of ``to_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from rdflib.term import Node, URIRef

from refgen.constants import REFERENT_PLACEHOLDER
from refgen.store.base import FactStore, Triple, has_statement


@dataclass(frozen=True)
class Predicate:
    """One signed fact template of a referring expression."""

    subject: Optional[Node]  # None = the candidate
    predicate: URIRef
    object: Optional[Node]  # None = the candidate
    negative: bool = False

    def instantiate(self, candidate: Node) -> Triple:
        """The concrete fact this template asks about for a candidate."""
        subject = candidate if self.subject is None else self.subject
        obj = candidate if self.object is None else self.object
        return Triple(subject, self.predicate, obj)

    def holds(self, candidate: Node, store: FactStore) -> bool:
        """Check the template against the store for one candidate."""
        present = has_statement(store, *self.instantiate(candidate))
        return not present if self.negative else present

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject": None if self.subject is None else str(self.subject),
            "predicate": str(self.predicate),
            "object": None if self.object is None else str(self.object),
            "negative": self.negative,
        }

    def __str__(self) -> str:
        subject = REFERENT_PLACEHOLDER if self.subject is None else str(self.subject)
        obj = REFERENT_PLACEHOLDER if self.object is None else str(self.object)
        return f"{subject}\t{'NOT' if self.negative else ''}\t{self.predicate}\t{obj}"


class ReferringExpression:
    """A description, as an ordered list of positive and negative predicates."""

    def __init__(self, referent: Optional[Node] = None):
        self.referent = referent
        self._predicates: List[Predicate] = []

    def _template(self, term: Optional[Node]) -> Optional[Node]:
        if term is None or (self.referent is not None and term == self.referent):
            return None
        return term

    def _add(self, subject: Optional[Node], predicate: URIRef, obj: Optional[Node], negative: bool):
        pred = Predicate(self._template(subject), predicate, self._template(obj), negative)
        self._predicates.append(pred)
        return pred

    def add_positive(self, subject: Optional[Node], predicate: URIRef, obj: Optional[Node]) -> Predicate:
        return self._add(subject, predicate, obj, False)

    def add_negative(self, subject: Optional[Node], predicate: URIRef, obj: Optional[Node]) -> Predicate:
        return self._add(subject, predicate, obj, True)

    def add_predicate(self, predicate: Predicate) -> Predicate:
        """Add a template as given; its terms are not compared with the referent."""
        self._predicates.append(predicate)
        return predicate

    def add_statement(self, fact: Triple, negative: bool = False) -> Predicate:
        """Add a store fact, replacing the referent with the implicit marker."""
        return self._add(fact[0], fact[1], fact[2], negative)

    @property
    def predicates(self) -> Tuple[Predicate, ...]:
        return tuple(self._predicates)

    def has_negatives(self) -> bool:
        return any(pred.negative for pred in self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)

    def __iter__(self) -> Iterator[Predicate]:
        return iter(self._predicates)

    def to_dict(self) -> Dict[str, Any]:
        return {"predicates": [pred.to_dict() for pred in self._predicates]}

    def __str__(self) -> str:
        return "\n".join(str(pred) for pred in self._predicates)

    def __repr__(self) -> str:
        return f"ReferringExpression(referent={self.referent!r}, predicates={len(self)})"
