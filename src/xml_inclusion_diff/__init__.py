"""XML inclusion diff.

Checks that an expected XML document is structurally included in an actual
one: every element, attribute and ordered text node of expected must be found
in actual, which may carry extra content. Element order is not significant;
the order of all other nodes is. This is not a two-way diff: for a stricter
notion of similarity, compare in both directions.

API levels:
- Level 1: compare_strings(), compare_files(), compare_documents(), render_result()
- Level 2: InclusionComparator with DiffConfig for repeated runs and metrics
"""

__version__ = "0.1.0"
__author__ = "XML Inclusion Diff Team"

from .api import compare_documents, compare_files, compare_strings, render_result
from .diff import InclusionComparator, IgnorePattern, parse_pattern
from .shared import (
    NO_DIFF,
    ConfigError,
    ConfigValidationError,
    ComparisonResult,
    Diff,
    DiffConfig,
    MalformedPatternError,
    NoDiff,
)
from .tree import (
    Comment,
    DocumentLoadError,
    Element,
    Other,
    Text,
    load_file,
    load_string,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: comparison functions
    "compare_documents",
    "compare_files",
    "compare_strings",
    "render_result",

    # Level 2: configured comparator
    "InclusionComparator",
    "DiffConfig",
    "IgnorePattern",
    "parse_pattern",

    # Results
    "ComparisonResult",
    "Diff",
    "NoDiff",
    "NO_DIFF",

    # Document model and loading
    "Comment",
    "Element",
    "Other",
    "Text",
    "load_file",
    "load_string",

    # Errors
    "ConfigError",
    "ConfigValidationError",
    "DocumentLoadError",
    "MalformedPatternError",
]
