"""Ignore-path matching.

Ignore expressions understand two forms only:

    /feed/author    rooted: matches exactly the element path feed/author
    //updated       anywhere: matches any element path ending in updated

Element names are plain local names; they match elements in any namespace.
The path of an element is the sequence of local names from the document root
down to and including that element, each element counted once.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Sequence, Tuple

from xml_inclusion_diff.shared.config import MalformedPatternError

# Characters that would introduce predicates, attribute steps or namespace
# qualification; none of these are supported in ignore expressions.
_UNSUPPORTED_CHARACTERS = frozenset("[]@:")


class PatternKind(Enum):
    """How an ignore pattern is anchored."""

    ROOTED = auto()     # Leading '/', whole path must match
    ANYWHERE = auto()   # Leading '//', path suffix must match


@dataclass(frozen=True)
class IgnorePattern:
    """Parsed form of one ignore expression."""

    kind: PatternKind
    segments: Tuple[str, ...]
    expression: str = ""

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("Ignore pattern must have at least one segment")

    def matches(self, path: Sequence[str]) -> bool:
        """Test whether an element path satisfies this pattern."""
        return matches(self, path)

    def __str__(self) -> str:
        marker = "//" if self.kind is PatternKind.ANYWHERE else "/"
        return marker + "/".join(self.segments)


def parse_pattern(expression: str) -> IgnorePattern:
    """Parse one ignore expression.

    An expression without a leading slash is treated as rooted, since ignore
    paths are always absolute.

    Args:
        expression: Raw expression such as ``//updated`` or ``/feed/author``

    Returns:
        The parsed IgnorePattern

    Raises:
        MalformedPatternError: If no segment remains after the slash marker, a
            segment is empty, or a segment uses unsupported XPath syntax
    """
    text = expression.strip()
    if text.startswith("//"):
        kind = PatternKind.ANYWHERE
        body = text[2:]
    elif text.startswith("/"):
        kind = PatternKind.ROOTED
        body = text[1:]
    else:
        kind = PatternKind.ROOTED
        body = text

    if not body:
        raise MalformedPatternError(expression, "no element names given")

    segments = tuple(body.split("/"))
    for segment in segments:
        if not segment:
            raise MalformedPatternError(expression, "empty path segment")
        unsupported = _UNSUPPORTED_CHARACTERS.intersection(segment)
        if unsupported:
            raise MalformedPatternError(
                expression,
                f"unsupported syntax {''.join(sorted(unsupported))!r} in {segment!r}",
            )

    return IgnorePattern(kind=kind, segments=segments, expression=expression)


def parse_patterns(expressions: Iterable[str]) -> Tuple[IgnorePattern, ...]:
    """Parse a sequence of ignore expressions, failing on the first bad one."""
    return tuple(parse_pattern(expression) for expression in expressions)


def matches(pattern: IgnorePattern, path: Sequence[str]) -> bool:
    """Test whether ``path`` (root first) satisfies ``pattern``."""
    segments = pattern.segments
    if pattern.kind is PatternKind.ROOTED:
        return tuple(path) == segments
    if len(segments) > len(path):
        return False
    return tuple(path[len(path) - len(segments):]) == segments


def is_ignored(
    label: str,
    current_path: Sequence[str],
    patterns: Iterable[IgnorePattern],
) -> bool:
    """Decide whether the element ``label`` under ``current_path`` is ignored.

    ``current_path`` is the path of the element's parent; the candidate path
    tested against every pattern is ``current_path`` followed by ``label``.
    """
    candidate = tuple(current_path) + (label,)
    return any(matches(pattern, candidate) for pattern in patterns)
