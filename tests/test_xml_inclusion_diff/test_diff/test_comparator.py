"""Tests for the inclusion comparator.

Most cases load small documents with the lxml loader; node-level behaviour
is tested on hand-built trees.
"""

import pytest

from xml_inclusion_diff.diff import InclusionComparator
from xml_inclusion_diff.shared import NO_DIFF, Diff, DiffConfig
from xml_inclusion_diff.tree import Comment, Element, Other, Text, load_string


def run(expected_xml, actual_xml, **config):
    comparator = InclusionComparator(DiffConfig(**config))
    return comparator.run(load_string(expected_xml), load_string(actual_xml))


class TestInclusion:
    """Test the basic inclusion semantics."""

    def test_identical_documents(self):
        xml = '<a x="1"><b>text</b><c/></a>'
        assert run(xml, xml) == NO_DIFF

    def test_extra_sibling_in_actual(self):
        assert run("<a><b/></a>", "<a><c/><b/></a>") == NO_DIFF

    def test_extra_attribute_in_actual(self):
        assert run('<a x="1"/>', '<a x="1" y="2"/>') == NO_DIFF

    def test_inclusion_is_not_symmetric(self):
        """Test swapping the documents can change the outcome."""
        assert run("<a/>", '<a x="1"/>').is_similar
        assert not run('<a x="1"/>', "<a/>").is_similar

    def test_element_order_is_not_significant(self):
        assert run("<a><b/><c/><d/></a>", "<a><d/><b/><c/></a>") == NO_DIFF

    def test_extra_content_at_depth(self):
        expected = "<a><b><c>1</c></b></a>"
        actual = '<a z="9"><x/><b q="1"><y/><c>1</c><w>2</w></b></a>'
        assert run(expected, actual) == NO_DIFF


class TestAttributes:
    """Test attribute inclusion."""

    def test_attribute_value_mismatch(self):
        result = run('<a x="1"/>', '<a x="2"/>')
        assert isinstance(result, Diff)
        assert result.path == ("a",)
        assert result.message.startswith("Attributes are different at <a>")
        assert 'Expected: x="1"' in result.message
        assert 'Found: x="2"' in result.message

    def test_missing_attribute(self):
        result = run('<a x="1"/>', '<a y="1"/>')
        assert not result.is_similar
        assert result.path == ("a",)

    def test_values_are_not_trimmed(self):
        assert not run('<a x="1"/>', '<a x=" 1"/>').is_similar

    def test_skip_text_ignores_attribute_values(self):
        assert run('<a x="1"/>', '<a x="2"/>', skip_text=True) == NO_DIFF

    def test_skip_text_still_requires_attribute(self):
        assert not run('<a x="1"/>', "<a/>", skip_text=True).is_similar

    def test_namespaced_attribute_matched_by_uri(self):
        expected = '<a xmlns:p="urn:x" p:id="1"/>'
        actual = '<a xmlns:q="urn:x" q:id="1"/>'
        assert run(expected, actual) == NO_DIFF

    def test_namespaced_attribute_is_not_unqualified(self):
        expected = '<a xmlns:p="urn:x" p:id="1"/>'
        assert not run(expected, '<a id="1"/>').is_similar
        assert not run('<a id="1"/>', expected).is_similar

    def test_includes_attributes_directly(self):
        comparator = InclusionComparator()
        e1 = Element("a", attributes={"a": "1"})
        e2 = Element("a", attributes={"a": "1", "b": "2"})
        assert comparator.includes_attributes(e1, e2)
        assert not comparator.includes_attributes(e1, Element("a", attributes={"b": "2"}))
        assert not comparator.includes_attributes(e1, Element("a", attributes={"a": "2"}))
        skipping = InclusionComparator(DiffConfig(skip_text=True))
        assert skipping.includes_attributes(e1, Element("a", attributes={"a": "2", "b": "x"}))


class TestText:
    """Test text comparison."""

    def test_text_mismatch(self):
        result = run("<a><b>hi</b></a>", "<a><b>bye</b></a>")
        assert isinstance(result, Diff)
        assert result.path == ("a",)
        assert "Diff at /a/b: Expected 'hi' but 'bye' found." in result.message

    def test_text_mismatch_skipped(self):
        assert run("<a><b>hi</b></a>", "<a><b>bye</b></a>", skip_text=True) == NO_DIFF

    def test_text_is_trimmed(self):
        assert run("<a>  hi\n</a>", "<a>hi</a>") == NO_DIFF

    def test_mismatch_reports_untrimmed_text(self):
        result = run("<a> hi </a>", "<a>bye</a>")
        assert result.message == "Expected ' hi ' but 'bye' found."

    def test_whitespace_in_expected_is_insignificant(self):
        expected = "<a>\n  <b/>\n  <c/>\n</a>"
        assert run(expected, "<a><c/><b/></a>") == NO_DIFF

    def test_whitespace_in_actual_before_text(self):
        assert run("<a><b/>hi</a>", "<a>\n  <b/>hi</a>") == NO_DIFF

    def test_text_order_is_significant(self):
        result = run("<a>one<b/>two</a>", "<a>two<b/>one</a>")
        assert not result.is_similar
        assert result.path == ("a",)

    def test_missing_text(self):
        result = run("<a>hello</a>", "<a/>")
        assert isinstance(result, Diff)
        assert result.message == "Expected text 'hello' but no further content found."

    def test_elements_do_not_block_text(self):
        result = run("<a>hello</a>", "<a><b/></a>")
        assert isinstance(result, Diff)
        assert result.message == "Expected text 'hello' but no further content found."

    def test_elements_swapped_around_text(self):
        assert run("<a><b/>t<c/></a>", "<a><b/>t<c/></a>") == NO_DIFF
        assert run("<a><b/>t<c/></a>", "<a><c/>t<b/></a>") == NO_DIFF

    def test_extra_element_before_text(self):
        assert run("<a><b/>t</a>", "<a><b/><b/>t</a>") == NO_DIFF

    def test_element_passed_by_text_is_still_available(self):
        assert run("<a>t<b/></a>", "<a><b/>t</a>") == NO_DIFF

    def test_processing_instruction_after_extra_element(self):
        assert run("<a><?pi one?></a>", "<a><x/><?pi one?></a>") == NO_DIFF


class TestComments:
    """Test comments never take part in comparison."""

    def test_comments_ignored(self):
        assert run("<a><!-- note -->text</a>", "<a>text<!-- other --></a>") == NO_DIFF

    def test_comment_in_expected_needs_no_counterpart(self):
        assert run("<a><!-- note --></a>", "<a/>") == NO_DIFF

    def test_compare_with_comment(self):
        comparator = InclusionComparator()
        assert comparator.compare(Comment("x"), Element("a")) == NO_DIFF
        assert comparator.compare(Text("x"), Comment("y")) == NO_DIFF


class TestOtherNodes:
    """Test processing instructions and other opaque nodes."""

    def test_processing_instructions_equal(self):
        assert run("<a><?pi one?></a>", "<a><?pi one?></a>") == NO_DIFF

    def test_processing_instruction_content_mismatch(self):
        result = run("<a><?pi one?></a>", "<a><?pi two?></a>")
        assert not result.is_similar
        assert run("<a><?pi one?></a>", "<a><?pi two?></a>", skip_text=True) == NO_DIFF

    def test_processing_instruction_order(self):
        result = run("<a><?p one?><?q two?></a>", "<a><?q two?><?p one?></a>")
        assert not result.is_similar

    def test_entity_references_by_name(self):
        comparator = InclusionComparator()
        expected = Element("a", children=[Other(kind="entity", name="copy")])
        same = Element("a", children=[Other(kind="entity", name="copy")])
        other = Element("a", children=[Other(kind="entity", name="reg")])
        assert comparator.compare(expected, same) == NO_DIFF
        result = comparator.compare(expected, other)
        assert result.message == "Expected &copy; but &reg; found."

    def test_mismatched_kinds_are_a_diff(self):
        comparator = InclusionComparator()
        result = comparator.compare(Text("x"), Other(kind="entity", name="e"), ("r",))
        assert isinstance(result, Diff)
        assert result.path == ("r",)

    def test_non_node_raises_type_error(self):
        with pytest.raises(TypeError, match="Not a document node"):
            InclusionComparator().compare("a", Text("a"))


class TestElementMatching:
    """Test element identity, multiset consumption and candidate reporting."""

    def test_name_mismatch_at_root(self):
        result = run("<a/>", "<b/>")
        assert isinstance(result, Diff)
        assert result.path == ("a",)
        assert result.message == "Expected <a> but <b> found."

    def test_prefixes_irrelevant_when_uri_matches(self):
        expected = '<a xmlns="urn:x"><b/></a>'
        actual = '<p:a xmlns:p="urn:x"><p:b/></p:a>'
        assert run(expected, actual) == NO_DIFF

    def test_namespace_mismatch(self):
        result = run('<a xmlns="urn:x"/>', '<a xmlns="urn:y"/>')
        assert isinstance(result, Diff)
        assert "namespace 'urn:x'" in result.message
        assert "namespace 'urn:y'" in result.message

    def test_namespaced_child_not_found(self):
        result = run('<a><b xmlns="urn:x"/></a>', "<a><b/></a>")
        assert result.message == "Expected element <b> not found."

    def test_duplicate_expected_needs_duplicate_actual(self):
        """Test each actual element satisfies at most one expected element."""
        result = run("<a><b/><b/></a>", "<a><b/></a>")
        assert isinstance(result, Diff)
        assert result.path == ("a",)
        assert result.message == "Expected element <b> not found."

    def test_duplicates_matched_in_any_order(self):
        expected = '<a><b x="1"/><b x="2"/></a>'
        actual = '<a><b x="2"/><b x="1"/></a>'
        assert run(expected, actual) == NO_DIFF

    def test_first_fit_not_best_fit(self):
        """Test the first fully matching candidate is consumed."""
        expected = '<a><b/><b x="1"/></a>'
        actual = '<a><b x="1"/><b/></a>'
        result = run(expected, actual)
        assert not result.is_similar
        assert "None of the elements found fully matches <b>" in result.message

    def test_all_candidate_failures_reported(self):
        result = run('<a><b x="1"/></a>', '<a><b x="2"/><b x="3"/></a>')
        assert isinstance(result, Diff)
        assert result.path == ("a",)
        assert result.message.startswith("None of the elements found fully matches <b>:")
        assert result.message.count("Diff at /a/b: Attributes are different") == 2
        assert "\n\t" in result.message

    def test_sibling_path_after_failed_candidate(self):
        """Test a failed nested comparison leaves sibling paths intact."""
        expected = '<r><x><y a="1"/></x><z>t</z></r>'
        actual = '<r><x><y a="2"/></x><x><y a="1"/></x><z>u</z></r>'
        result = run(expected, actual)
        assert isinstance(result, Diff)
        assert result.path == ("r",)
        assert "Diff at /r/x/y" not in result.message
        assert "Diff at /r/z: Expected 't' but 'u' found." in result.message

    def test_same_element(self):
        comparator = InclusionComparator()
        a1 = Element("a", namespace_uri="urn:x", prefix="p", namespaces={"p": "urn:x"})
        a2 = Element("a", namespace_uri="urn:x", namespaces={"": "urn:x"})
        assert comparator.same_element(a1, a2)
        assert not comparator.same_element(a1, Element("a"))
        assert not comparator.same_element(a1, Element("b", namespace_uri="urn:x"))


class TestIgnorePatterns:
    """Test ignore patterns suppress whole subtrees."""

    def test_anywhere_pattern_suppresses_attribute_difference(self):
        result = run('<a><b x="1"/></a>', '<a><b x="99"/></a>', ignore_patterns=("//b",))
        assert result == NO_DIFF

    def test_ignored_element_need_not_exist(self):
        assert run("<a><b/></a>", "<a/>", ignore_patterns=("//b",)) == NO_DIFF

    def test_ignored_subtree_content(self):
        expected = "<a><b><c>1</c><d/></b></a>"
        actual = "<a><b><c>2</c></b></a>"
        assert run(expected, actual, ignore_patterns=("/a/b",)) == NO_DIFF

    def test_sibling_differences_still_detected(self):
        result = run(
            '<a><b x="1"/><c>1</c></a>',
            '<a><b x="2"/><c>2</c></a>',
            ignore_patterns=("//b",),
        )
        assert isinstance(result, Diff)
        assert result.path == ("a",)
        assert "Diff at /a/c:" in result.message

    def test_rooted_pattern_only_at_its_depth(self):
        expected = '<a><b><c x="1"/></b><d><c x="1"/></d></a>'
        actual = '<a><b><c x="2"/></b><d><c x="2"/></d></a>'
        result = run(expected, actual, ignore_patterns=("/a/b/c",))
        assert isinstance(result, Diff)
        assert result.path == ("a",)
        assert "Diff at /a/d/c:" in result.message
        assert "Diff at /a/b" not in result.message

    def test_ignored_root_matches_anything(self):
        assert run('<a x="1"/>', "<z/>", ignore_patterns=("/a",)) == NO_DIFF

    def test_ignored_element_matches_any_name(self):
        comparator = InclusionComparator(DiffConfig(ignore_patterns=("/a/b",)))
        assert comparator.same_element(Element("b"), Element("zzz"), ("a",))
        assert not comparator.same_element(Element("b"), Element("zzz"), ())

    def test_pattern_names_match_any_namespace(self):
        expected = '<a xmlns="urn:x"><updated>1</updated></a>'
        actual = '<a xmlns="urn:x"><updated>2</updated></a>'
        assert run(expected, actual, ignore_patterns=("//updated",)) == NO_DIFF


class TestMetrics:
    """Test run metrics."""

    def test_metrics_recorded(self):
        comparator = InclusionComparator(DiffConfig(ignore_patterns=("//c",)))
        result = comparator.run(
            load_string("<a><b>x</b><c/></a>"),
            load_string("<a><b>x</b><c/></a>"),
        )
        assert result == NO_DIFF
        metrics = comparator.metrics
        assert metrics.elements_compared == 2
        assert metrics.candidates_evaluated == 1
        assert metrics.ignored_subtrees == 1
        assert metrics.text_nodes_compared == 1
        assert metrics.max_depth == 2
        assert metrics.processing_time_ms >= 0.0

    def test_metrics_reset_between_runs(self):
        comparator = InclusionComparator()
        root = load_string("<a><b/></a>")
        comparator.run(root, root)
        comparator.run(root, root)
        assert comparator.metrics.elements_compared == 2
