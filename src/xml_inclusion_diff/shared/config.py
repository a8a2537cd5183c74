"""Configuration for inclusion comparison.

:class:`DiffConfig` carries everything the comparator needs besides the two
documents: the raw ignore-pattern expressions and the text-skip flag. Patterns
are parsed while the configuration is built, so a malformed pattern aborts a
run before any comparison starts.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from xml_inclusion_diff.diff.ignore import IgnorePattern

_VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


class MalformedPatternError(ConfigValidationError):
    """Exception raised when an ignore-pattern expression cannot be parsed."""

    def __init__(self, expression: str, reason: str):
        super().__init__(
            f"Malformed ignore pattern {expression!r}: {reason}",
            field_name="ignore_patterns",
            suggestions=[
                "Use '/root/child' for a rooted path",
                "Use '//name' to match an element at any depth",
            ],
        )
        self.expression = expression
        self.reason = reason


@dataclass(frozen=True)
class DiffConfig:
    """Immutable configuration for one comparison run.

    Attributes:
        ignore_patterns: Raw ignore-path expressions, in command-line order
        skip_text: Ignore text content and attribute values, compare structure only
        correlation_id: Optional ID attached to every log record of the run
        logging_level: Level used when the command-line tool configures logging
    """

    ignore_patterns: Tuple[str, ...] = ()
    skip_text: bool = False
    correlation_id: Optional[str] = None
    logging_level: str = "WARNING"

    _compiled: Tuple["IgnorePattern", ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Validate the configuration and parse every ignore pattern."""
        from xml_inclusion_diff.diff.ignore import parse_patterns

        if isinstance(self.ignore_patterns, str):
            raise ConfigValidationError(
                "ignore_patterns must be a sequence of strings, not a string",
                field_name="ignore_patterns",
            )
        # Accept any iterable but store a tuple to keep the instance hashable
        object.__setattr__(self, "ignore_patterns", tuple(self.ignore_patterns))

        if self.logging_level not in _VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {_VALID_LOGGING_LEVELS}",
                field_name="logging_level",
            )

        object.__setattr__(self, "_compiled", parse_patterns(self.ignore_patterns))

    @property
    def compiled_patterns(self) -> Tuple["IgnorePattern", ...]:
        """Parsed ignore patterns, in the order they were given."""
        return self._compiled

    def override(self, **kwargs: Any) -> "DiffConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = DiffConfig(ignore_patterns=("//updated",))
            >>> config.override(skip_text=True).skip_text
            True
        """
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "ignore_patterns": list(self.ignore_patterns),
            "skip_text": self.skip_text,
            "correlation_id": self.correlation_id,
            "logging_level": self.logging_level,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiffConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files surface
        instead of being silently ignored.
        """
        known = {"ignore_patterns", "skip_text", "correlation_id", "logging_level"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                suggestions=[f"Valid keys are: {', '.join(sorted(known))}"],
            )

        patterns = data.get("ignore_patterns", ())
        if isinstance(patterns, str) or not isinstance(patterns, (list, tuple)):
            raise ConfigValidationError(
                "ignore_patterns must be a list of strings",
                field_name="ignore_patterns",
            )

        skip_text = data.get("skip_text", False)
        if not isinstance(skip_text, bool):
            raise ConfigValidationError(
                "skip_text must be a boolean", field_name="skip_text"
            )

        return cls(
            ignore_patterns=tuple(patterns),
            skip_text=skip_text,
            correlation_id=data.get("correlation_id"),
            logging_level=data.get("logging_level", "WARNING"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "DiffConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "DiffConfig":
        """Load configuration from a JSON file."""
        path = Path(config_path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        return cls.from_json(text)
