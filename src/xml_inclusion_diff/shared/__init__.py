"""Shared utilities for inclusion comparison.

This module provides the configuration object, result types and logging
helpers used across the tree, diff, api and cli layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    DiffConfig,
    MalformedPatternError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    NO_DIFF,
    AncestorPath,
    ComparisonMetrics,
    ComparisonResult,
    Diff,
    NoDiff,
    format_path,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "DiffConfig",
    "MalformedPatternError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "NO_DIFF",
    "AncestorPath",
    "ComparisonMetrics",
    "ComparisonResult",
    "Diff",
    "NoDiff",
    "format_path",
]
