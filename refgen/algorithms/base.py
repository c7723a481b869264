"""
Common interface of the description selection algorithms.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from rdflib.term import Node

from refgen.expression import ReferringExpression
from refgen.store.base import FactStore


class ReferringExpressionAlgorithm(ABC):
    """Abstract base class for referring expression algorithms."""

    #: Registry name used by the command line driver
    name: str = ""

    @abstractmethod
    def resolve(
        self, referent: Node, confusors: Sequence[Node], store: FactStore
    ) -> ReferringExpression:
        """
        Build a description that holds for the referent and fails for every confusor.

        Args:
            referent: Entity to describe
            confusors: Entities the description must exclude
            store: Facts about all of them; only read

        Returns:
            A new ReferringExpression

        Raises:
            ReferringExpressionError: When no description can be produced
        """
        ...
