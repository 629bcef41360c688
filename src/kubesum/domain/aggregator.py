"""Reduce manifest text into resource totals."""

import math

from kubesum.domain.quantity_parser import parse_cpu, parse_memory
from kubesum.domain.resource_totals import ResourceTotals, combine
from kubesum.domain.section_extractor import (
    DEFAULT_PATTERNS,
    ExtractionPatterns,
    extract_sections,
)


def summarize(
    text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS
) -> ResourceTotals:
    """Return requested and limit totals declared in one document."""
    raw = extract_sections(text, patterns)
    return ResourceTotals(
        memory_requested=sum(parse_memory(v) for v in raw.request_memory),
        memory_limit=sum(parse_memory(v) for v in raw.limit_memory),
        cpu_requested=math.fsum(parse_cpu(v) for v in raw.request_cpu),
        cpu_limit=math.fsum(parse_cpu(v) for v in raw.limit_cpu),
    )


__all__ = ["combine", "summarize"]
