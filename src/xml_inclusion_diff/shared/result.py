"""Result objects for inclusion comparison.

A comparison run terminates with exactly one of two values: :data:`NO_DIFF`
when the expected document is included in the actual one, or a :class:`Diff`
describing the first discrepancy found. Mismatches are results, not
exceptions; the comparator always terminates normally.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Tuple

AncestorPath = Tuple[str, ...]

SIMILAR_MESSAGE = "Documents are similar."


def format_path(path: AncestorPath) -> str:
    """Render an ancestor path as ``/a/b/c``."""
    return "".join(f"/{label}" for label in path)


class ComparisonResult(ABC):
    """Common base for the two terminal comparison outcomes."""

    @property
    @abstractmethod
    def is_similar(self) -> bool:
        """Whether expected is included in actual."""

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary."""

    def to_json(self, indent: int = 2) -> str:
        """Convert the result to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass(frozen=True)
class NoDiff(ComparisonResult):
    """Expected is included in actual."""

    @property
    def is_similar(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"similar": True, "message": SIMILAR_MESSAGE}

    def __str__(self) -> str:
        return SIMILAR_MESSAGE


@dataclass(frozen=True)
class Diff(ComparisonResult):
    """First mismatch found, with the ancestor path at which it occurred."""

    path: AncestorPath
    message: str

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("Diff message cannot be empty")

    @property
    def is_similar(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "similar": False,
            "path": format_path(self.path),
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"Diff at {format_path(self.path)}: {self.message}"


NO_DIFF = NoDiff()


@dataclass
class ComparisonMetrics:
    """Counters gathered during one comparison run."""

    elements_compared: int = 0
    candidates_evaluated: int = 0
    ignored_subtrees: int = 0
    text_nodes_compared: int = 0
    processing_time_ms: float = 0.0
    max_depth: int = 0

    @property
    def candidates_per_element(self) -> float:
        """Average number of same-named candidates tried per element."""
        if self.elements_compared == 0:
            return 0.0
        return self.candidates_evaluated / self.elements_compared

    def record_depth(self, depth: int) -> None:
        """Track the deepest ancestor path seen."""
        if depth > self.max_depth:
            self.max_depth = depth

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elements_compared": self.elements_compared,
            "candidates_evaluated": self.candidates_evaluated,
            "ignored_subtrees": self.ignored_subtrees,
            "text_nodes_compared": self.text_nodes_compared,
            "processing_time_ms": self.processing_time_ms,
            "max_depth": self.max_depth,
        }
