"""Document trees for inclusion comparison.

Key Components:
    Element, Text, Comment, Other: the closed set of node kinds
    load_string, load_bytes, load_file: lxml-backed loaders producing node trees
    DocumentLoadError: raised when a document cannot be loaded
"""

from .loader import (
    DocumentLoadError,
    convert_element,
    load_bytes,
    load_file,
    load_string,
)
from .nodes import (
    Comment,
    Element,
    Node,
    Other,
    Text,
    describe_node,
)

__all__ = [
    "DocumentLoadError",
    "convert_element",
    "load_bytes",
    "load_file",
    "load_string",
    "Comment",
    "Element",
    "Node",
    "Other",
    "Text",
    "describe_node",
]
