"""Resource totals value object and its field-wise reduction."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceTotals:
    """Summed container requests and limits.

    Memory is kept as the raw magnitude found in the manifests, CPU in cores.
    """

    memory_requested: int = 0
    memory_limit: int = 0
    cpu_requested: float = 0.0
    cpu_limit: float = 0.0

    def __add__(self, other: object) -> ResourceTotals:
        if not isinstance(other, ResourceTotals):
            return NotImplemented
        return ResourceTotals(
            memory_requested=self.memory_requested + other.memory_requested,
            memory_limit=self.memory_limit + other.memory_limit,
            cpu_requested=self.cpu_requested + other.cpu_requested,
            cpu_limit=self.cpu_limit + other.cpu_limit,
        )

    def to_dict(self) -> dict[str, int | float]:
        """Convert to serializable dict."""
        return {
            "memory_requested": self.memory_requested,
            "memory_limit": self.memory_limit,
            "cpu_requested": round(self.cpu_requested, 3),
            "cpu_limit": round(self.cpu_limit, 3),
        }


ZERO_TOTALS = ResourceTotals()


def combine(totals: Iterable[ResourceTotals]) -> ResourceTotals:
    """Sum totals field by field, starting from `ZERO_TOTALS`.

    CPU fields go through `math.fsum`, which is exactly rounded, so the
    result does not depend on the order of `totals`.
    """
    items = tuple(totals)
    if not items:
        return ZERO_TOTALS
    return ResourceTotals(
        memory_requested=sum(t.memory_requested for t in items),
        memory_limit=sum(t.memory_limit for t in items),
        cpu_requested=math.fsum(t.cpu_requested for t in items),
        cpu_limit=math.fsum(t.cpu_limit for t in items),
    )
