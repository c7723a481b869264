"""
refgen: referring expression generation over knowledge graphs.

Given a referent, a list of confusors and a fact store, each selector
returns a set of facts that holds for the referent and for none of the
confusors.
"""

__version__ = "0.1.0"

from refgen.algorithms import (
    ALGORITHMS,
    ConstraintSelector,
    GraphSearchSelector,
    IncrementalSelector,
    create_algorithm,
)
from refgen.errors import (
    NoInformationForConfusor,
    NoPrioritiesForType,
    NoSolutionFound,
    ReferringExpressionError,
    RemainingConfusorsUnresolved,
    ResolutionTimeout,
    UnknownReferentType,
)
from refgen.expression import Predicate, ReferringExpression
from refgen.priorities import PriorityConfig, default_priorities, load_priority_config
from refgen.resolver import apply, picks_out
from refgen.store import FactStore, OverlayFactStore, RdfFactStore, Triple

__all__ = [
    "__version__",
    "ALGORITHMS",
    "create_algorithm",
    "IncrementalSelector",
    "ConstraintSelector",
    "GraphSearchSelector",
    "ReferringExpressionError",
    "UnknownReferentType",
    "NoPrioritiesForType",
    "NoInformationForConfusor",
    "RemainingConfusorsUnresolved",
    "NoSolutionFound",
    "ResolutionTimeout",
    "Predicate",
    "ReferringExpression",
    "PriorityConfig",
    "default_priorities",
    "load_priority_config",
    "apply",
    "picks_out",
    "FactStore",
    "OverlayFactStore",
    "RdfFactStore",
    "Triple",
]
