"""Parsers for resource quantity strings found in manifests.

Only the leading decimal magnitude is kept. Unit suffixes such as ``m``,
``Mi`` or ``G`` are ignored, so values written in different unit systems
are summed as-is.
"""

import re

NUMERIC_PREFIX = re.compile(r"[0-9]+")

# Magnitudes must fit an unsigned 64-bit integer.
MAX_QUANTITY = 2**64 - 1


def numeric_prefix(value: str) -> int:
    """Return the leading unsigned integer of `value`, or 0 when there is none.

    A prefix larger than `MAX_QUANTITY` also yields 0.
    """
    match = NUMERIC_PREFIX.match(value)
    if match is None:
        return 0
    digits = match.group()
    if len(digits.lstrip("0")) > len(str(MAX_QUANTITY)):
        return 0
    number = int(digits)
    return number if number <= MAX_QUANTITY else 0


def parse_memory(memory_str: str) -> int:
    """Parse memory quantity and return its raw magnitude."""
    return numeric_prefix(memory_str)


def parse_cpu(cpu_str: str) -> float:
    """Parse CPU quantity given in millicores and return cores."""
    return numeric_prefix(cpu_str) / 1000.0
