"""Diagnostic messages and input validation for hydrohead."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation or design-check finding."""

    severity: Severity
    parameter: str
    message: str
    code: str = ""
    section_id: str | None = None
    value: Any = None
    limit: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "code": self.code,
            "parameter": self.parameter,
            "message": self.message,
            "section_id": self.section_id,
            "value": self.value,
            "limit": self.limit,
        }


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def codes(self) -> list[str]:
        return [m.code for m in self.messages]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def info(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, parameter, message, **kwargs)

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)


# --- Common validators ---


def validate_finite(name: str, value: float, result: ValidationResult, **kwargs: Any) -> bool:
    """Validate that a value is a finite number.  Returns True when it is."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        result.error(name, f"{name} must be a finite number, got {value!r}", code="not_finite", **kwargs)
        return False
    return True


def validate_positive(name: str, value: float, result: ValidationResult, **kwargs: Any) -> None:
    """Validate that a value is strictly positive."""
    if value <= 0:
        result.error(name, f"{name} must be positive, got {value}", code="not_positive", **kwargs)


def validate_non_negative(name: str, value: float, result: ValidationResult, **kwargs: Any) -> None:
    """Validate that a value is zero or positive."""
    if value < 0:
        result.error(name, f"{name} must not be negative, got {value}", code="negative", **kwargs)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* into [low, high]."""
    return max(low, min(high, value))
