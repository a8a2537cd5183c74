"""Recursive inclusion comparison of two document trees.

The comparator checks that everything in the expected tree has a counterpart
in the actual tree:

- element children are an unordered multiset; each actual element satisfies
  at most one expected element, and the first fully matching candidate wins
- text and other non-element nodes are compared in order; actual elements
  between them do not interrupt that order
- whitespace-only text in expected and all comments are insignificant
- ignored elements match anything, subtree included
- actual may contain any amount of extra content at every level

The comparison stops at the first mismatch and reports it as a :class:`Diff`.
"""

import time
from typing import List, Optional, Sequence

from xml_inclusion_diff.diff.ignore import is_ignored
from xml_inclusion_diff.shared import (
    NO_DIFF,
    AncestorPath,
    ComparisonMetrics,
    ComparisonResult,
    Diff,
    DiffConfig,
    get_logger,
)
from xml_inclusion_diff.tree.nodes import (
    Comment,
    Element,
    Node,
    Other,
    Text,
    describe_node,
)

MS_PER_SECOND = 1000
_NODE_TYPES = (Element, Text, Comment, Other)


def _is_insignificant(node: Node) -> bool:
    return isinstance(node, Comment) or (isinstance(node, Text) and node.is_whitespace)


def _next_ordered(nodes: Sequence[Node]) -> Optional[int]:
    """Index of the first node that takes part in ordered comparison.

    Elements are matched as a multiset elsewhere and never block the cursor.
    """
    for index, node in enumerate(nodes):
        if not isinstance(node, Element) and not _is_insignificant(node):
            return index
    return None


def _remove_instance(nodes: List[Node], target: Node) -> None:
    for index, node in enumerate(nodes):
        if node is target:
            del nodes[index]
            return
    raise ValueError("Node is not among the remaining actual nodes")


class InclusionComparator:
    """Compares an expected tree against an actual tree for inclusion.

    One comparator can run any number of comparisons; it holds no per-run
    state besides the metrics of the most recent run. The ancestor path is
    passed down the recursion as an immutable tuple.
    """

    def __init__(
        self,
        config: Optional[DiffConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize comparator.

        Args:
            config: Comparison configuration; defaults to no ignores, text compared
            correlation_id: Optional correlation ID, overrides the config's
        """
        self.config = config or DiffConfig()
        self.patterns = self.config.compiled_patterns
        self.skip_text = self.config.skip_text
        self.metrics = ComparisonMetrics()
        self.logger = get_logger(
            __name__, correlation_id or self.config.correlation_id, "comparator"
        )

    def run(self, expected: Element, actual: Element) -> ComparisonResult:
        """Compare two document roots and record metrics for the run."""
        self.metrics = ComparisonMetrics()
        start_time = time.time()

        result = self.compare(expected, actual)

        self.metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        self.logger.info(
            "Comparison completed",
            extra={
                "similar": result.is_similar,
                "ignore_patterns": len(self.patterns),
                "skip_text": self.skip_text,
                **self.metrics.to_dict(),
            }
        )
        return result

    def is_ignored(self, label: str, path: AncestorPath) -> bool:
        """Whether element ``label`` whose parent has path ``path`` is ignored."""
        return bool(self.patterns) and is_ignored(label, path, self.patterns)

    def compare(
        self, expected: Node, actual: Node, path: AncestorPath = ()
    ) -> ComparisonResult:
        """Compare two nodes found under the element path ``path``.

        Raises:
            TypeError: If either argument is not a document node
        """
        for node in (expected, actual):
            if not isinstance(node, _NODE_TYPES):
                raise TypeError(f"Not a document node: {type(node).__name__}")
        path = tuple(path)

        if isinstance(expected, Comment) or isinstance(actual, Comment):
            return NO_DIFF
        if isinstance(expected, Text) and isinstance(actual, Text):
            return self._compare_text(expected, actual, path)
        if isinstance(expected, Element) and isinstance(actual, Element):
            return self._compare_elements(expected, actual, path)
        if isinstance(expected, Other) and isinstance(actual, Other):
            return self._compare_other(expected, actual, path)

        return Diff(
            path,
            f"Expected {describe_node(expected)} but {describe_node(actual)} found."
        )

    def compare_children(
        self,
        expected_nodes: Sequence[Node],
        actual_nodes: Sequence[Node],
        path: AncestorPath = ()
    ) -> ComparisonResult:
        """Check that ``expected_nodes`` are included in ``actual_nodes``.

        ``path`` is the path of the element owning both child sequences.
        """
        path = tuple(path)
        remaining: List[Node] = list(actual_nodes)

        for node in expected_nodes:
            if isinstance(node, Element):
                if self.is_ignored(node.local_name, path):
                    self.metrics.ignored_subtrees += 1
                    continue
                result = self._consume_matching_element(node, remaining, path)
                if not result.is_similar:
                    return result

            elif _is_insignificant(node):
                continue

            else:
                position = _next_ordered(remaining)
                if position is None:
                    return Diff(
                        path,
                        f"Expected {describe_node(node)} but no further content found."
                    )
                result = self.compare(node, remaining[position], path)
                if not result.is_similar:
                    return result
                # unconsumed elements stay available to later expected elements
                remaining[:position + 1] = [
                    node for node in remaining[:position] if isinstance(node, Element)
                ]

        return NO_DIFF

    def _consume_matching_element(
        self, expected: Element, remaining: List[Node], path: AncestorPath
    ) -> ComparisonResult:
        """Find and remove the first actual sibling fully matching ``expected``."""
        candidates = [
            node for node in remaining
            if isinstance(node, Element) and self.same_element(expected, node, path)
        ]
        if not candidates:
            return Diff(path, f"Expected element <{expected.qualified_name}> not found.")

        failures = []
        for candidate in candidates:
            self.metrics.candidates_evaluated += 1
            result = self.compare(expected, candidate, path)
            if result.is_similar:
                _remove_instance(remaining, candidate)
                return NO_DIFF
            failures.append(result)

        self.logger.debug(
            "No candidate fully matches",
            extra={"element": expected.qualified_name, "candidates": len(candidates)}
        )
        return Diff(
            path,
            f"None of the elements found fully matches <{expected.qualified_name}>: \n\t"
            + "\n\t".join(str(failure) for failure in failures)
        )

    def same_element(self, e1: Element, e2: Element, path: AncestorPath = ()) -> bool:
        """Whether ``e2`` can stand for ``e1``.

        True when ``e1`` is ignored at ``path`` (an ignored element matches any
        element), or both have the same local name and resolved namespace URI.
        Prefix strings play no part.
        """
        if self.is_ignored(e1.local_name, tuple(path)):
            return True
        return (
            e1.local_name == e2.local_name
            and e1.resolved_namespace == e2.resolved_namespace
        )

    def includes_attributes(self, e1: Element, e2: Element) -> bool:
        """Whether every attribute of ``e1`` is present in ``e2``.

        Attributes are matched by local name and resolved namespace URI.
        Values must be equal, untrimmed, unless text is skipped. Extra
        attributes on ``e2`` are allowed.
        """
        for namespace_uri, local_name, value in e1.iter_attributes():
            found = e2.find_attribute(local_name, namespace_uri)
            if found is None:
                return False
            if not self.skip_text and found != value:
                return False
        return True

    def _compare_elements(
        self, expected: Element, actual: Element, path: AncestorPath
    ) -> ComparisonResult:
        element_path = path + (expected.local_name,)
        self.metrics.elements_compared += 1
        self.metrics.record_depth(len(element_path))

        if self.is_ignored(expected.local_name, path):
            self.metrics.ignored_subtrees += 1
            self.logger.debug(
                "Ignoring subtree", extra={"element": expected.qualified_name}
            )
            return NO_DIFF

        if not self.same_element(expected, actual, path):
            return Diff(element_path, self._name_mismatch(expected, actual))

        if not self.includes_attributes(expected, actual):
            return Diff(
                element_path,
                f"Attributes are different at <{expected.qualified_name}>"
                f"\n\tExpected: {expected.attributes_repr()}"
                f"\n\tFound: {actual.attributes_repr()}"
            )

        return self.compare_children(expected.children, actual.children, element_path)

    def _compare_text(
        self, expected: Text, actual: Text, path: AncestorPath
    ) -> ComparisonResult:
        self.metrics.text_nodes_compared += 1
        if self.skip_text or expected.content.strip() == actual.content.strip():
            return NO_DIFF
        return Diff(path, f"Expected '{expected.content}' but '{actual.content}' found.")

    def _compare_other(
        self, expected: Other, actual: Other, path: AncestorPath
    ) -> ComparisonResult:
        if expected.kind == actual.kind and expected.name == actual.name:
            if self.skip_text or expected.content.strip() == actual.content.strip():
                return NO_DIFF
        return Diff(
            path,
            f"Expected {expected.describe()} but {actual.describe()} found."
        )

    @staticmethod
    def _name_mismatch(expected: Element, actual: Element) -> str:
        message = f"Expected <{expected.qualified_name}>"
        if expected.local_name == actual.local_name:
            return (
                f"{message} in namespace '{expected.resolved_namespace}' but "
                f"<{actual.qualified_name}> in namespace "
                f"'{actual.resolved_namespace}' found."
            )
        return f"{message} but <{actual.qualified_name}> found."
