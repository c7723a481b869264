"""
Resolution filter: which candidates does a description actually pick out?

Used to check selector output; the selectors never call it.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from rdflib.term import Node

from refgen.expression import ReferringExpression
from refgen.store.base import FactStore

logger = logging.getLogger(__name__)


def apply(
    expression: ReferringExpression, candidates: Sequence[Node], store: FactStore
) -> List[Node]:
    """
    Candidates for which every predicate of the expression holds.

    Predicates are applied in order and evaluation stops as soon as no
    candidate is left. Candidate order is kept.
    """
    remaining = list(candidates)
    for predicate in expression:
        if not remaining:
            break
        remaining = [c for c in remaining if predicate.holds(c, store)]
        logger.debug(f"{len(remaining)} candidates left after '{predicate}'")
    return remaining


def picks_out(
    expression: ReferringExpression,
    referent: Node,
    confusors: Sequence[Node],
    store: FactStore,
) -> bool:
    """True if, among the confusors and the referent, only the referent matches."""
    candidates = list(dict.fromkeys([*confusors, referent]))
    return apply(expression, candidates, store) == [referent]
