"""Document loading into the comparison node model.

Documents are parsed with ``lxml.etree`` and converted into :mod:`nodes`
trees. Entity references are kept as nodes rather than expanded, comments
and processing instructions are preserved, and the parser never touches the
network.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from lxml import etree

from xml_inclusion_diff.shared import get_logger
from xml_inclusion_diff.tree.nodes import (
    OTHER_ENTITY,
    OTHER_PROCESSING_INSTRUCTION,
    XML_NAMESPACE,
    Comment,
    Element,
    Node,
    Other,
    Text,
)

PathLike = Union[str, Path]

_ENCODING_DECLARATION = re.compile(
    r"""\s*<\?xml\s[^>]*?(?P<encoding>\s+encoding\s*=\s*(['"])[^'"]*\2)"""
)


class DocumentLoadError(Exception):
    """Raised when a document cannot be read or is not well-formed XML."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Could not load {source}: {reason}")
        self.source = source
        self.reason = reason


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        remove_blank_text=False,
        remove_comments=False,
        remove_pis=False,
        no_network=True,
    )


def load_string(text: str, source: str = "<string>") -> Element:
    """Parse an XML string and return its root element.

    The string is already decoded, so an encoding named in its XML
    declaration is disregarded.

    Raises:
        DocumentLoadError: If the text is not well-formed XML
    """
    match = _ENCODING_DECLARATION.match(text)
    if match:
        text = text[:match.start("encoding")] + text[match.end("encoding"):]
    return _parse(text, source)


def load_bytes(data: bytes, source: str = "<bytes>") -> Element:
    """Parse XML bytes and return its root element.

    Raises:
        DocumentLoadError: If the data is not well-formed XML
    """
    return _parse(data, source)


def _parse(data: Union[str, bytes], source: str) -> Element:
    logger = get_logger(__name__, component="loader")
    try:
        root = etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as e:
        logger.error("Document is not well-formed", extra={"source": source})
        raise DocumentLoadError(source, str(e)) from e
    logger.debug("Document parsed", extra={"source": source, "root": root.tag})
    return convert_element(root)


def load_file(path: PathLike) -> Element:
    """Parse an XML file and return its root element.

    Raises:
        DocumentLoadError: If the file cannot be read or is not well-formed
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        get_logger(__name__, component="loader").error(
            "Document could not be read", extra={"source": str(file_path)}
        )
        raise DocumentLoadError(str(file_path), e.strerror or str(e)) from e
    return load_bytes(data, str(file_path))


def _namespace_map(lxml_element: etree._Element) -> Dict[str, str]:
    return {prefix or "": uri for prefix, uri in lxml_element.nsmap.items()}


def _attribute_name(clark_name: str, namespaces: Dict[str, str]) -> str:
    """Rewrite a ``{uri}local`` attribute name using an in-scope prefix."""
    if not clark_name.startswith("{"):
        return clark_name
    qname = etree.QName(clark_name)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in namespaces.items():
        # Unprefixed attributes are never in the default namespace
        if prefix and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    raise ValueError(f"No prefix in scope for attribute {clark_name!r}")


def _append_text(children: List[Node], text: Optional[str]) -> None:
    if text:
        children.append(Text(text))


def convert_element(lxml_element: etree._Element) -> Element:
    """Convert an lxml element (and its subtree) into an :class:`Element`."""
    qname = etree.QName(lxml_element)
    namespaces = _namespace_map(lxml_element)
    attributes = {
        _attribute_name(name, namespaces): value
        for name, value in lxml_element.attrib.items()
    }

    children: List[Node] = []
    _append_text(children, lxml_element.text)
    for child in lxml_element:
        children.append(_convert_node(child))
        _append_text(children, child.tail)

    return Element(
        local_name=qname.localname,
        namespace_uri=qname.namespace or "",
        prefix=lxml_element.prefix,
        namespaces=namespaces,
        attributes=attributes,
        children=children,
    )


def _convert_node(lxml_node: etree._Element) -> Node:
    if lxml_node.tag is etree.Comment:
        return Comment(lxml_node.text or "")
    if lxml_node.tag is etree.ProcessingInstruction:
        return Other(
            kind=OTHER_PROCESSING_INSTRUCTION,
            name=lxml_node.target,
            content=lxml_node.text or "",
        )
    if lxml_node.tag is etree.Entity:
        return Other(kind=OTHER_ENTITY, name=lxml_node.name)
    return convert_element(lxml_node)
