"""Node model for documents under comparison.

A document is a tree of four node kinds: :class:`Element`, :class:`Text`,
:class:`Comment` and :class:`Other` (processing instructions and unresolved
entity references). Trees are built once by the loader and never mutated by
the comparator.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

OTHER_PROCESSING_INSTRUCTION = "processing-instruction"
OTHER_ENTITY = "entity"


def split_qualified_name(name: str) -> Tuple[Optional[str], str]:
    """Split ``prefix:local`` into its parts; the prefix is None when absent."""
    if ":" in name:
        prefix, local = name.split(":", 1)
        return prefix, local
    return None, name


@dataclass(frozen=True)
class Text:
    """Character data."""

    content: str

    @property
    def is_whitespace(self) -> bool:
        """True when the text holds nothing but whitespace."""
        return not self.content.strip()


@dataclass(frozen=True)
class Comment:
    """A comment; comments never take part in comparison."""

    content: str = ""


@dataclass(frozen=True)
class Other:
    """Any ordered non-element node the comparator treats opaquely."""

    kind: str
    name: str = ""
    content: str = ""

    def __post_init__(self) -> None:
        if not self.kind:
            raise ValueError("Node kind cannot be empty")

    def describe(self) -> str:
        if self.kind == OTHER_ENTITY:
            return f"&{self.name};"
        if self.kind == OTHER_PROCESSING_INSTRUCTION:
            return f"<?{self.name} {self.content}?>" if self.content else f"<?{self.name}?>"
        return f"{self.kind} {self.name}".strip()


@dataclass(eq=False)
class Element:
    """An element with its in-scope namespace bindings.

    Elements compare by identity: two structurally equal siblings are still
    two distinct nodes, which is what consumption during matching relies on.

    Attributes:
        local_name: Element name without prefix
        namespace_uri: Resolved namespace URI, empty for no namespace
        prefix: Prefix as written in the source, None when unprefixed
        namespaces: In-scope prefix bindings, ``""`` for the default namespace
        attributes: Attribute values keyed by qualified name as written
        children: Ordered child nodes
    """

    local_name: str
    namespace_uri: str = ""
    prefix: Optional[str] = None
    namespaces: Dict[str, str] = field(default_factory=dict)
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the element name and its attribute prefixes."""
        if not self.local_name:
            raise ValueError("Element local name cannot be empty")
        if ":" in self.local_name:
            raise ValueError(
                f"Element local name cannot contain a prefix: {self.local_name!r}"
            )
        for name in self.attributes:
            prefix, _ = split_qualified_name(name)
            if prefix is not None and self.resolve_prefix(prefix) is None:
                raise ValueError(f"Unbound prefix in attribute name {name!r}")

    @property
    def qualified_name(self) -> str:
        """Name as written, ``prefix:local`` or ``local``."""
        if self.prefix:
            return f"{self.prefix}:{self.local_name}"
        return self.local_name

    @property
    def resolved_namespace(self) -> str:
        """Namespace URI of the element, resolved through its own prefix."""
        if self.namespace_uri:
            return self.namespace_uri
        return self.resolve_prefix(self.prefix) or ""

    def resolve_prefix(self, prefix: Optional[str]) -> Optional[str]:
        """Resolve a prefix against this element's scope.

        ``None`` or ``""`` resolves the default namespace, which is the empty
        string when no default namespace is declared. Unbound prefixes give
        None.
        """
        if prefix == "xml":
            return XML_NAMESPACE
        if not prefix:
            return self.namespaces.get("", "")
        return self.namespaces.get(prefix)

    def iter_attributes(self) -> Iterator[Tuple[Optional[str], str, str]]:
        """Yield ``(namespace_uri, local_name, value)`` for every attribute.

        Unprefixed attributes are in no namespace, regardless of any default
        namespace declaration.
        """
        for name, value in self.attributes.items():
            prefix, local = split_qualified_name(name)
            uri = self.resolve_prefix(prefix) if prefix is not None else None
            yield uri, local, value

    def find_attribute(
        self, local_name: str, namespace_uri: Optional[str] = None
    ) -> Optional[str]:
        """Look up an attribute value by local name and namespace URI."""
        for uri, local, value in self.iter_attributes():
            if local == local_name and uri == namespace_uri:
                return value
        return None

    def attributes_repr(self) -> str:
        """Render attributes in source order, as used in diff messages."""
        return " ".join(f'{name}="{value}"' for name, value in self.attributes.items())

    def __repr__(self) -> str:
        return (
            f"Element({self.qualified_name!r}, attributes={len(self.attributes)}, "
            f"children={len(self.children)})"
        )


Node = Union[Element, Text, Comment, Other]


def describe_node(node: "Node") -> str:
    """Short human-readable description of a node for diff messages."""
    if isinstance(node, Element):
        return f"<{node.qualified_name}>"
    if isinstance(node, Text):
        return f"text {node.content!r}"
    if isinstance(node, Comment):
        return "comment"
    if isinstance(node, Other):
        return node.describe()
    raise TypeError(f"Not a document node: {type(node).__name__}")
