"""Inclusion comparison engine.

Key Components:
    InclusionComparator: recursive comparison of an expected and an actual tree
    IgnorePattern, parse_pattern, matches, is_ignored: ignore-path matching
"""

from .comparator import InclusionComparator
from .ignore import (
    IgnorePattern,
    PatternKind,
    is_ignored,
    matches,
    parse_pattern,
    parse_patterns,
)

__all__ = [
    "InclusionComparator",
    "IgnorePattern",
    "PatternKind",
    "is_ignored",
    "matches",
    "parse_pattern",
    "parse_patterns",
]
