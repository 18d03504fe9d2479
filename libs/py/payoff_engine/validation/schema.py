# SPDX-License-Identifier: MIT

"""Result container shared by the validation checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ValidationResult:
    """Errors block an action, warnings are advisory only."""

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        self.is_valid = False
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def is_ok(self) -> bool:
        return self.is_valid and not self.errors

    def extend(self, other: "ValidationResult", prefix: str = "") -> None:
        """Merge ``other`` into this result, prefixing each message."""

        for error in other.errors:
            self.add_error(f"{prefix}{error}")
        for warning in other.warnings:
            self.add_warning(f"{prefix}{warning}")

    def to_payload(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
