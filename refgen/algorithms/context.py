"""
Fact gathering shared by the selectors.

Picks the referent's priority list, collects the facts about the referent
and its confusors, and reports predicates that the priority configuration
does not know about.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from rdflib.namespace import RDF
from rdflib.term import Node

from refgen.constants import INVERSE_SUFFIX
from refgen.errors import NoInformationForConfusor, NoPrioritiesForType, UnknownReferentType
from refgen.priorities import PriorityConfig
from refgen.store.base import FactStore, Triple, local_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeSelection:
    """The referent type whose priorities drive a resolution."""

    type_name: str
    priorities: Tuple[str, ...]
    ignored: FrozenSet[str]

    @property
    def known(self) -> FrozenSet[str]:
        return frozenset(self.priorities) | self.ignored

    def rank(self, name: str) -> Optional[int]:
        """Position of a predicate name in the priority list (None if absent)."""
        try:
            return self.priorities.index(name)
        except ValueError:
            return None


def scan_types(
    referent: Node, store: FactStore, config: PriorityConfig
) -> Tuple[Optional[TypeSelection], List[str]]:
    """
    Find the first type of the referent that has priorities.

    Types are scanned in store order; those scanned before the match are only
    kept for error messages.

    Returns:
        (selection or None, type names scanned)
    """
    scanned: List[str] = []
    for fact in store.statements(referent, RDF.type, None):
        type_name = str(fact.object)
        scanned.append(type_name)
        priorities = config.priorities_for(type_name)
        if priorities is not None:
            return TypeSelection(type_name, priorities, config.ignored_for(type_name)), scanned
    return None, scanned


def select_type_priorities(referent: Node, store: FactStore, config: PriorityConfig) -> TypeSelection:
    """
    Like scan_types, but a referent without usable priorities is an error.

    Raises:
        UnknownReferentType: The referent has no type fact
        NoPrioritiesForType: None of its types has priorities
    """
    selection, scanned = scan_types(referent, store, config)
    if not scanned:
        raise UnknownReferentType(referent)
    if selection is None:
        raise NoPrioritiesForType(referent, scanned)
    logger.debug(
        f"Using priorities {list(selection.priorities)} (type '{selection.type_name}') "
        f"for referent '{referent}'"
    )
    return selection


def prepare_confusors(referent: Node, confusors: Iterable[Node]) -> List[Node]:
    """Drop repeated confusors and the referent itself, keeping order."""
    result = []
    for confusor in dict.fromkeys(confusors):
        if confusor == referent:
            logger.warning(f"Referent '{referent}' listed among its own confusors, skipping it")
            continue
        result.append(confusor)
    return result


def collect_facts(store: FactStore, entity: Node) -> List[Triple]:
    """Facts with the entity as subject, then as object (each fact once)."""
    facts = dict.fromkeys(store.statements(entity, None, None))
    facts.update(dict.fromkeys(store.statements(None, None, entity)))
    return list(facts)


def collect_confusor_facts(store: FactStore, confusors: Sequence[Node]) -> Dict[Node, List[Triple]]:
    """
    Facts about every confusor.

    Raises:
        NoInformationForConfusor: A confusor has no facts at all
    """
    result: Dict[Node, List[Triple]] = {}
    for confusor in confusors:
        facts = collect_facts(store, confusor)
        if not facts:
            raise NoInformationForConfusor(confusor)
        result[confusor] = facts
    return result


def fact_key(fact: Triple, entity: Node) -> str:
    """
    Priority name of a fact as seen from one entity.

    The predicate's local name when the entity is the subject, the local name
    plus "-1" when it is the object.
    """
    name = local_name(fact.predicate)
    if fact.subject == entity:
        return name
    return name + INVERSE_SUFFIX


def report_coverage_gaps(
    selection: TypeSelection, facts_by_entity: Mapping[Node, Iterable[Triple]], referent: Node
) -> Set[str]:
    """Warn about predicates neither prioritized nor ignored for the type."""
    unknown = set()
    for entity, facts in facts_by_entity.items():
        for fact in facts:
            unknown.add(fact_key(fact, entity))
    unknown -= selection.known
    if unknown:
        logger.warning(
            f"For type '{selection.type_name}' missing properties: {sorted(unknown)}, "
            f"referent {referent}"
        )
    return unknown
