"""Interface of the asynchronous timer-query facility."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List


class QueryBackend(ABC):
    """Asynchronous elapsed-time queries, completed in issue order.

    A handle is opaque to the caller. ``begin``/``end`` bracket the GPU work to
    be measured; ``is_result_available`` must never block.
    """

    name: str = "abstract"

    @abstractmethod
    def allocate(self, n: int) -> List[Any]:
        """Create ``n`` reusable query handles."""

    @abstractmethod
    def begin(self, handle: Any) -> None:
        ...

    @abstractmethod
    def end(self, handle: Any) -> None:
        ...

    @abstractmethod
    def is_result_available(self, handle: Any) -> bool:
        ...

    @abstractmethod
    def fetch_result_ns(self, handle: Any) -> int:
        """Elapsed time between ``begin`` and ``end`` in nanoseconds."""


__all__ = ["QueryBackend"]
