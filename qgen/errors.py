"""Error types raised while loading and querying template mixes."""

from __future__ import annotations

from typing import Optional


class ConfigError(ValueError):
    """Base class for malformed or inconsistent mix-file input."""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class SourceUnavailable(ConfigError):
    """The line source could not be read."""


class InsufficientInput(ConfigError):
    """Fewer than two non-blank lines were supplied."""


class MalformedHeader(ConfigError):
    """The first line is not three numeric percentages."""


class PercentageSumMismatch(ConfigError):
    """Header percentages do not add up to 100.0."""


class MalformedTemplateLine(ConfigError):
    """A template line has fewer than three tokens."""


class UnknownOperationKind(MalformedTemplateLine):
    """A template line starts with a tag other than I, M or S."""


class UnparseableShare(ConfigError):
    """A template share is not a finite number."""


class PartitionInvariantViolation(ConfigError):
    """A kind's template shares do not cover (0, 100] exactly."""


class TemplateNotFound(LookupError):
    """No template owns the requested draw."""


__all__ = [
    "ConfigError",
    "SourceUnavailable",
    "InsufficientInput",
    "MalformedHeader",
    "PercentageSumMismatch",
    "MalformedTemplateLine",
    "UnknownOperationKind",
    "UnparseableShare",
    "PartitionInvariantViolation",
    "TemplateNotFound",
]
