"""Public comparison API."""

from .compare import compare_documents, compare_files, compare_strings, render_result

__all__ = [
    "compare_documents",
    "compare_files",
    "compare_strings",
    "render_result",
]
