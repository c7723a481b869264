"""
Incremental algorithm (Dale & Reiter, 1995).

Walks the referent type's priority list once. For each predicate name, the
referent's facts with that name are tried in store order; a fact is kept if
it rules out at least one pending confusor. Nothing is ever taken back, so
the priority order alone decides the outcome.

Reference:
    Dale, R. and Reiter, E. (1995). Computational interpretations of the
    Gricean maxims in the generation of referring expressions.
    Cognitive Science 19(2), 233-263.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional, Sequence, Set

from rdflib.term import Node

from refgen.algorithms.base import ReferringExpressionAlgorithm
from refgen.algorithms.context import (
    collect_confusor_facts,
    collect_facts,
    fact_key,
    prepare_confusors,
    report_coverage_gaps,
    select_type_priorities,
)
from refgen.errors import RemainingConfusorsUnresolved
from refgen.expression import ReferringExpression
from refgen.priorities import PriorityConfig
from refgen.store.base import FactStore, Triple

logger = logging.getLogger(__name__)


def substitute(fact: Triple, referent: Node, confusor: Node) -> Triple:
    """The same fact with the confusor in the referent's place(s)."""
    subject = confusor if fact.subject == referent else fact.subject
    obj = confusor if fact.object == referent else fact.object
    return Triple(subject, fact.predicate, obj)


def rules_out(
    confusors: Iterable[Node],
    fact: Triple,
    referent: Node,
    world: Set[Triple],
    confusor_facts: Mapping[Node, Sequence[Triple]],
) -> List[Node]:
    """
    Confusors that a referent fact tells apart from the referent.

    A confusor is ruled out when the fact does not hold for it, and it has
    some other value for the same predicate in the same role. A confusor with
    no value at all for the predicate stays pending.
    """
    as_subject = fact.subject == referent
    result: List[Node] = []
    for confusor in confusors:
        if confusor in result:
            continue
        substituted = substitute(fact, referent, confusor)
        if substituted in world:
            logger.debug(f"Already present: {substituted}")
            continue
        for other in confusor_facts.get(confusor, ()):
            if other.predicate != fact.predicate:
                continue
            if (other.subject if as_subject else other.object) != confusor:
                continue
            logger.debug(f"Statement '{fact}' rules out confusor {confusor}")
            result.append(confusor)
            break
    return result


class IncrementalSelector(ReferringExpressionAlgorithm):
    """Greedy, single pass, priority ordered selection."""

    name = "incremental"

    def __init__(self, config: PriorityConfig, max_predicates: Optional[int] = None):
        """
        Args:
            config: Priorities and ignore lists per type
            max_predicates: Give up once the description reaches this many
                facts with confusors still pending (None = only bounded by
                the priority list)
        """
        self.config = config
        self.max_predicates = max_predicates

    def resolve(
        self, referent: Node, confusors: Sequence[Node], store: FactStore
    ) -> ReferringExpression:
        selection = select_type_priorities(referent, store, self.config)

        referent_facts = collect_facts(store, referent)
        pending = prepare_confusors(referent, confusors)
        confusor_facts = collect_confusor_facts(store, pending)

        world = set(referent_facts)
        for facts in confusor_facts.values():
            world.update(facts)

        facts_by_entity = {referent: referent_facts, **confusor_facts}
        report_coverage_gaps(selection, facts_by_entity, referent)

        result = ReferringExpression(referent)
        selected: Set[Triple] = set()

        for name in selection.priorities:
            if not pending or self._is_full(result):
                break
            if name in selection.ignored:
                continue
            for fact in referent_facts:
                if fact in selected or fact_key(fact, referent) != name:
                    continue
                removed = rules_out(pending, fact, referent, world, confusor_facts)
                if not removed:
                    continue
                selected.add(fact)
                result.add_statement(fact)
                pending = [c for c in pending if c not in removed]
                if not pending or self._is_full(result):
                    break

        if pending:
            raise RemainingConfusorsUnresolved(referent, pending)

        logger.debug(f"Selected {len(result)} facts for '{referent}'")
        return result

    def _is_full(self, expression: ReferringExpression) -> bool:
        return self.max_predicates is not None and len(expression) >= self.max_predicates
