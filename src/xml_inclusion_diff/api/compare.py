"""Simple comparison functions.

These functions are the entry points for most callers: hand them two parsed
roots, two XML strings or two file paths and get back a comparison result.

Examples:
    >>> result = compare_strings("<a><b/></a>", "<a><c/><b/></a>")
    >>> result.is_similar
    True
    >>> compare_strings('<a x="1"/>', '<a x="2"/>').path
    ('a',)
"""

from typing import Optional

from xml_inclusion_diff.diff import InclusionComparator
from xml_inclusion_diff.shared import ComparisonResult, DiffConfig
from xml_inclusion_diff.tree import Element, load_file, load_string
from xml_inclusion_diff.tree.loader import PathLike


def compare_documents(
    expected: Element,
    actual: Element,
    config: Optional[DiffConfig] = None
) -> ComparisonResult:
    """Check that ``expected`` is included in ``actual``.

    Args:
        expected: Root element of the expected document
        actual: Root element of the actual document
        config: Ignore patterns and text-skip flag; defaults to a strict comparison

    Returns:
        NO_DIFF, or a Diff describing the first mismatch found
    """
    return InclusionComparator(config).run(expected, actual)


def compare_strings(
    expected_xml: str,
    actual_xml: str,
    config: Optional[DiffConfig] = None
) -> ComparisonResult:
    """Parse two XML strings and compare them.

    Raises:
        DocumentLoadError: If either string is not well-formed XML
    """
    expected = load_string(expected_xml, source="<expected>")
    actual = load_string(actual_xml, source="<actual>")
    return compare_documents(expected, actual, config)


def compare_files(
    expected_path: PathLike,
    actual_path: PathLike,
    config: Optional[DiffConfig] = None
) -> ComparisonResult:
    """Load two XML files and compare them.

    Both documents are loaded before the comparison starts; a load failure
    means no comparison happens.

    Raises:
        DocumentLoadError: If either file cannot be read or parsed
    """
    expected = load_file(expected_path)
    actual = load_file(actual_path)
    return compare_documents(expected, actual, config)


def render_result(result: ComparisonResult) -> str:
    """Text shown to the user for a comparison result."""
    return str(result)
