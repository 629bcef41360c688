"""Pattern-based extraction of requests/limits sections from manifest text.

Manifests are treated as plain text. A section is recognized when the CPU
and memory fields directly follow the section keyword, in either order::

    requests:
      cpu: "100m"
      memory: "128M"
    limits:
      memory: "512M"
      cpu: "500m"

Any other layout is ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

SectionName = Literal["requests", "limits"]
FieldOrder = Literal["cpu-memory", "memory-cpu"]

_CPU_VALUE = r'"([^"\n]*)"'
_MEMORY_VALUE = r'"?([^"\n]*)"?'


class PatternConfigError(ValueError):
    """Raised when an extraction pattern cannot be used."""


@dataclass(frozen=True)
class SectionPattern:
    """Compiled pattern for one section keyword and field order."""

    section: SectionName
    order: FieldOrder
    regex: re.Pattern[str]

    @classmethod
    def compile(
        cls, section: SectionName, order: FieldOrder, source: str
    ) -> SectionPattern:
        """Compile `source`; it must capture exactly two values."""
        try:
            regex = re.compile(source)
        except re.error as exc:
            raise PatternConfigError(
                f"invalid {section} pattern ({order}): {exc}"
            ) from exc
        if regex.groups != 2:
            raise PatternConfigError(
                f"{section} pattern ({order}) must have 2 capture groups, "
                f"got {regex.groups}"
            )
        return cls(section=section, order=order, regex=regex)


def section_source(section: SectionName, order: FieldOrder) -> str:
    """Return the built-in regex source for a section and field order."""
    if order == "cpu-memory":
        return rf"{section}:\s*cpu:\s*{_CPU_VALUE}\s*memory:\s*{_MEMORY_VALUE}"
    return rf"{section}:\s*memory:\s*{_MEMORY_VALUE}\s*cpu:\s*{_CPU_VALUE}"


@dataclass(frozen=True)
class ExtractionPatterns:
    """Set of section patterns applied to every document."""

    sections: tuple[SectionPattern, ...]

    @classmethod
    def from_sources(
        cls, sources: dict[tuple[SectionName, FieldOrder], str]
    ) -> ExtractionPatterns:
        """Build a pattern set from `(section, order) -> regex source`."""
        return cls(
            tuple(
                SectionPattern.compile(section, order, source)
                for (section, order), source in sources.items()
            )
        )


DEFAULT_SOURCES: dict[tuple[SectionName, FieldOrder], str] = {
    (section, order): section_source(section, order)
    for section in ("requests", "limits")
    for order in ("cpu-memory", "memory-cpu")
}

DEFAULT_PATTERNS = ExtractionPatterns.from_sources(DEFAULT_SOURCES)


@dataclass(frozen=True)
class RawSections:
    """Raw value strings per bucket, in document order."""

    request_cpu: tuple[str, ...] = ()
    request_memory: tuple[str, ...] = ()
    limit_cpu: tuple[str, ...] = ()
    limit_memory: tuple[str, ...] = ()


def _collect(
    text: str, patterns: ExtractionPatterns, section: SectionName
) -> list[tuple[int, str, str]]:
    found: list[tuple[int, str, str]] = []
    for pattern in patterns.sections:
        if pattern.section != section:
            continue
        for match in pattern.regex.finditer(text):
            first, second = match.group(1), match.group(2)
            if pattern.order == "cpu-memory":
                found.append((match.start(), first, second))
            else:
                found.append((match.start(), second, first))
    found.sort(key=lambda item: item[0])
    return found


def extract_sections(
    text: str, patterns: ExtractionPatterns = DEFAULT_PATTERNS
) -> RawSections:
    """Extract raw CPU and memory strings from requests and limits sections."""
    requests = _collect(text, patterns, "requests")
    limits = _collect(text, patterns, "limits")
    return RawSections(
        request_cpu=tuple(cpu for _, cpu, _ in requests),
        request_memory=tuple(memory for _, _, memory in requests),
        limit_cpu=tuple(cpu for _, cpu, _ in limits),
        limit_memory=tuple(memory for _, _, memory in limits),
    )
