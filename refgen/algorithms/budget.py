"""
Wall-clock budget for the graph search.
"""

from __future__ import annotations

import time
from typing import Optional

from refgen.errors import ResolutionTimeout


class Deadline:
    """
    A soft deadline checked cooperatively by long running searches.

    A budget of None never expires; a budget of 0 expires on the first check.
    """

    def __init__(self, budget_ms: Optional[int]):
        self.budget_ms = budget_ms
        self._start = time.monotonic()

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self._start) * 1000.0

    def expired(self) -> bool:
        return self.budget_ms is not None and self.elapsed_ms() >= self.budget_ms

    def check(self) -> None:
        """
        Raises:
            ResolutionTimeout: If the budget is used up
        """
        if self.budget_ms is None:
            return
        elapsed = self.elapsed_ms()
        if elapsed >= self.budget_ms:
            raise ResolutionTimeout(self.budget_ms, elapsed)
