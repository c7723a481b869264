"""
Errors raised while generating referring expressions.

Every kind is terminal for a single ``resolve`` call: generation is a pure
function of (referent, confusors, store, priorities), so retrying with the
same inputs cannot change the outcome.
"""

from __future__ import annotations

from typing import Iterable


class ReferringExpressionError(Exception):
    """Base class for all referring expression generation failures."""


class UnknownReferentType(ReferringExpressionError):
    """The referent has no type fact at all."""

    def __init__(self, referent):
        self.referent = referent
        super().__init__(f"Unknown type for referent '{referent}'")


class NoPrioritiesForType(ReferringExpressionError):
    """None of the referent's types has a priority list."""

    def __init__(self, referent, types: Iterable[str]):
        self.referent = referent
        self.types = tuple(types)
        super().__init__(
            f"No priorities for referent '{referent}' with types [{' '.join(self.types)}]"
        )


class NoInformationForConfusor(ReferringExpressionError):
    """A confusor has zero facts in the store."""

    def __init__(self, confusor):
        self.confusor = confusor
        super().__init__(f"No information available for confusor '{confusor}'")


class RemainingConfusorsUnresolved(ReferringExpressionError):
    """The selector ran out of options while some confusors still match."""

    def __init__(self, referent, remaining: Iterable):
        self.referent = referent
        self.remaining = tuple(remaining)
        names = ", ".join(str(c) for c in self.remaining)
        super().__init__(f"Confusors left for referent '{referent}': [{names}]")


class NoSolutionFound(ReferringExpressionError):
    """The constraint search found no description up to its size bound."""

    def __init__(self, referent, max_size: int):
        self.referent = referent
        self.max_size = max_size
        super().__init__(
            f"No description of at most {max_size} facts distinguishes '{referent}'"
        )


class ResolutionTimeout(ReferringExpressionError):
    """The graph search exceeded its wall-clock budget."""

    def __init__(self, budget_ms: int, elapsed_ms: float):
        self.budget_ms = budget_ms
        self.elapsed_ms = elapsed_ms
        super().__init__(f"Graph search timed out after {elapsed_ms:.0f} ms (budget {budget_ms} ms)")
