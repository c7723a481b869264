"""
Constraint based algorithm (Gardent, 2002).

The description is posed as a set constraint problem. With

    P+   features (predicate/value pairs) true of the referent
    Pi+  features true of confusor i
    P-   features true of some confusor but not of the referent

choose Sel+ within P+ and Sel- within P- such that, for every confusor i,

    | (Sel+ minus Pi+)  union  (Sel- intersect Pi+) | == 1

and Sel+ union Sel- is as small as possible. Sizes 1, 2, ... up to a bound
are tried in turn; the first satisfiable size wins and, within it, whatever
assignment z3 reports.

Each confusor must be told apart by exactly one selected feature, not "at
least one". This mirrors the reference formulation and can leave inputs
without a solution that a looser condition would solve.

Reference:
    Gardent, C. (2002). Generating minimal definite descriptions.
    Proceedings of ACL 2002, 96-103.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Dict, List, NamedTuple, Optional, Sequence, Set

from rdflib.term import Node, URIRef
from z3 import BoolVal, Bool, If, Not, Or, Solver, Sum, is_true, sat

from refgen.algorithms.base import ReferringExpressionAlgorithm
from refgen.algorithms.context import (
    TypeSelection,
    collect_confusor_facts,
    collect_facts,
    prepare_confusors,
    report_coverage_gaps,
    select_type_priorities,
)
from refgen.config import get_max_description_size
from refgen.constants import INVERSE_SUFFIX
from refgen.errors import NoSolutionFound
from refgen.expression import Predicate, ReferringExpression
from refgen.priorities import PriorityConfig
from refgen.store.base import FactStore, Triple, local_name

logger = logging.getLogger(__name__)


class Feature(NamedTuple):
    """
    Something that can be true of an entity.

    ``value`` is the other end of the fact, or None when the fact links the
    entity to itself; ``inverse`` marks facts where the entity is the object.
    """

    predicate: URIRef
    value: Optional[Node]
    inverse: bool = False

    @property
    def key(self) -> str:
        name = local_name(self.predicate)
        return name + INVERSE_SUFFIX if self.inverse else name

    def template(self, negative: bool = False) -> Predicate:
        """The feature as a description predicate; ``value`` stays a concrete term."""
        if self.inverse:
            return Predicate(self.value, self.predicate, None, negative)
        return Predicate(None, self.predicate, self.value, negative)

    def holds_for(self, entity: Node, store: FactStore) -> bool:
        return self.template().holds(entity, store)

    def add_to(self, expression: ReferringExpression, negative: bool) -> None:
        expression.add_predicate(self.template(negative))


def feature_of(fact: Triple, entity: Node) -> Feature:
    if fact.subject == entity:
        value = None if fact.object == entity else fact.object
        return Feature(fact.predicate, value, False)
    return Feature(fact.predicate, fact.subject, True)


def features_of(facts: Sequence[Triple], entity: Node, selection: TypeSelection) -> Set[Feature]:
    """Features of an entity whose predicate is in the priority list."""
    allowed = set(selection.priorities) - selection.ignored
    result = set()
    for fact in facts:
        feature = feature_of(fact, entity)
        if feature.key in allowed:
            result.add(feature)
    return result


class SetTerm:
    """A set over the numbered feature universe, as one boolean per element."""

    def __init__(self, members):
        self.members = list(members)

    @classmethod
    def variable(cls, name: str, size: int) -> "SetTerm":
        return cls(Bool(f"{name}_{i}") for i in range(size))

    def subset_of(self, elements: AbstractSet[int]) -> List:
        return [Not(m) for i, m in enumerate(self.members) if i not in elements]

    def intersect(self, elements: AbstractSet[int]) -> "SetTerm":
        return SetTerm(m if i in elements else BoolVal(False) for i, m in enumerate(self.members))

    def union(self, other: "SetTerm") -> "SetTerm":
        return SetTerm(Or(a, b) for a, b in zip(self.members, other.members))

    def cardinality(self):
        return Sum([If(m, 1, 0) for m in self.members])

    def values(self, model) -> List[int]:
        return [
            i for i, m in enumerate(self.members) if is_true(model.eval(m, model_completion=True))
        ]


class ConstraintSelector(ReferringExpressionAlgorithm):
    """Minimum cardinality description via a set constraint solver."""

    name = "constraint"

    def __init__(self, config: PriorityConfig, max_size: Optional[int] = None):
        """
        Args:
            config: Priorities and ignore lists per type
            max_size: Largest description size tried (defaults to
                REFGEN_MAX_DESCRIPTION_SIZE, 10)
        """
        self.config = config
        self.max_size = max_size if max_size is not None else get_max_description_size()

    def resolve(
        self, referent: Node, confusors: Sequence[Node], store: FactStore
    ) -> ReferringExpression:
        selection = select_type_priorities(referent, store, self.config)

        referent_facts = collect_facts(store, referent)
        confusors = prepare_confusors(referent, confusors)
        confusor_facts = collect_confusor_facts(store, confusors)
        report_coverage_gaps(selection, confusor_facts, referent)
        if not confusors:
            return ReferringExpression(referent)

        # membership by evaluation; a feature value may be the referent or a confusor
        candidates = features_of(referent_facts, referent, selection)
        for confusor in confusors:
            candidates |= features_of(confusor_facts[confusor], confusor, selection)
        p_plus = {f for f in candidates if f.holds_for(referent, store)}
        pi_plus = [{f for f in candidates if f.holds_for(c, store)} for c in confusors]
        p_minus = set().union(*pi_plus) - p_plus

        universe = self._number(p_plus | p_minus, selection)
        index = {feature: i for i, feature in enumerate(universe)}
        logger.debug(f"{len(p_plus)} positive and {len(p_minus)} negative candidate features")

        if not universe:
            raise NoSolutionFound(referent, self.max_size)

        all_ids = set(range(len(universe)))
        plus = SetTerm.variable("plus", len(universe))
        minus = SetTerm.variable("minus", len(universe))

        solver = Solver()
        solver.add(*plus.subset_of({index[f] for f in p_plus}))
        solver.add(*minus.subset_of({index[f] for f in p_minus}))
        for features in pi_plus:
            ids = {index[f] for f in features}
            differs = plus.intersect(all_ids - ids).union(minus.intersect(ids))
            solver.add(differs.cardinality() == 1)

        chosen = plus.union(minus)
        for size in range(1, self.max_size + 1):
            solver.push()
            solver.add(chosen.cardinality() == size)
            outcome = solver.check()
            logger.debug(f"Description size {size}: {outcome}")
            if outcome == sat:
                return self._read_out(referent, universe, solver.model(), plus, minus)
            solver.pop()

        raise NoSolutionFound(referent, self.max_size)

    @staticmethod
    def _number(features: Set[Feature], selection: TypeSelection) -> List[Feature]:
        """Order features by priority rank, then lexically."""
        ranks: Dict[str, int] = {name: i for i, name in enumerate(selection.priorities)}
        return sorted(
            features,
            key=lambda f: (
                ranks.get(f.key, len(ranks)),
                f.key,
                "" if f.value is None else str(f.value),
                str(f.predicate),
            ),
        )

    @staticmethod
    def _read_out(referent, universe, model, plus: SetTerm, minus: SetTerm) -> ReferringExpression:
        result = ReferringExpression(referent)
        logger.debug("P+:")
        for i in plus.values(model):
            logger.debug(f"\t{universe[i]}")
            universe[i].add_to(result, negative=False)
        logger.debug("P-:")
        for i in minus.values(model):
            logger.debug(f"\t{universe[i]}")
            universe[i].add_to(result, negative=True)
        return result
