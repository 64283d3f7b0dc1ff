"""Bounded retry of a whole transaction on storage conflicts.

Only ``TransactionConflict`` is retried: it guarantees nothing was
committed.  ``AmbiguousCommit`` and every other error pass through
untouched on the first occurrence.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from fulfillment.domain.exceptions import TransactionConflict

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 3
    backoff_seconds: float = 0.05

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("attempts must be at least 1")

    def run(self, operation: Callable[[], T], description: str) -> T:
        """Call *operation* until it succeeds or attempts run out.

        The last TransactionConflict is re-raised when every attempt
        conflicted.
        """
        for attempt in range(1, self.attempts + 1):
            try:
                return operation()
            except TransactionConflict as exc:
                if attempt == self.attempts:
                    logger.warning(
                        "%s: giving up after %d conflicting attempts",
                        description,
                        attempt,
                    )
                    raise
                logger.info(
                    "%s: conflict on attempt %d/%d (%s), retrying",
                    description,
                    attempt,
                    self.attempts,
                    exc,
                )
                time.sleep(self.backoff_seconds * attempt)
        raise AssertionError("unreachable")
