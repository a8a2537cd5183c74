#!/usr/bin/env python3
"""
Quick Start Guide for XML inclusion diff.

Walks through the main comparison features: unordered elements, extra
content in the actual document, text skipping and ignore patterns.
"""

import sys

from xml_inclusion_diff import (
    DiffConfig,
    InclusionComparator,
    compare_strings,
    load_string,
    render_result,
)

EXPECTED_FEED = """\
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Release notes</title>
  <updated>2008-01-01T00:00:00Z</updated>
  <entry id="1"><title>First</title></entry>
  <entry id="2"><title>Second</title></entry>
</feed>
"""

ACTUAL_FEED = """\
<atom:feed xmlns:atom="http://www.w3.org/2005/Atom">
  <atom:entry id="2" lang="en"><atom:title>Second</atom:title></atom:entry>
  <atom:updated>2024-06-30T12:00:00Z</atom:updated>
  <atom:title>Release notes</atom:title>
  <atom:entry id="1"><atom:title>First</atom:title></atom:entry>
  <atom:generator>nightly</atom:generator>
</atom:feed>
"""


def quick_start_example():
    """Compare two feeds that differ in order, prefixes and one timestamp."""

    print("QUICK START - XML inclusion diff")
    print("=" * 40)

    print("\nStep 1: Strict comparison")
    print("-" * 30)
    result = compare_strings(EXPECTED_FEED, ACTUAL_FEED)
    print(render_result(result))

    print("\nStep 2: Ignoring the timestamp")
    print("-" * 30)
    config = DiffConfig(ignore_patterns=("//updated",))
    result = compare_strings(EXPECTED_FEED, ACTUAL_FEED, config)
    print(render_result(result))

    print("\nStep 3: Structure only")
    print("-" * 30)
    config = DiffConfig(skip_text=True)
    result = compare_strings(EXPECTED_FEED, ACTUAL_FEED, config)
    print(render_result(result))


def reverse_direction_example():
    """Inclusion is not symmetric: actual has content expected lacks."""

    print("\nReverse direction")
    print("-" * 30)
    comparator = InclusionComparator(DiffConfig(ignore_patterns=("//updated",)))
    result = comparator.run(load_string(ACTUAL_FEED), load_string(EXPECTED_FEED))
    print(render_result(result))
    print(f"Elements compared: {comparator.metrics.elements_compared}")


def main():
    """Main function."""
    quick_start_example()
    reverse_direction_example()
    return 0


if __name__ == "__main__":
    sys.exit(main())
