"""Validation state attached to every page's component data."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional


class ModelValidationState(enum.Enum):
    UNVALIDATED = 0
    INVALID = 1
    VALID = 2
    SKIPPED = 3


@dataclass
class ModelError:
    """A single validation failure for a bound value."""
    error_message: str
    exception: Optional[str] = None


@dataclass
class ModelStateEntry:
    """Validation result for one submitted key."""
    raw_value: Optional[Any] = None
    attempted_value: Optional[str] = None
    errors: list[ModelError] = field(default_factory=list)
    validation_state: ModelValidationState = ModelValidationState.UNVALIDATED

    def add_error(self, error_message: str, exception: Optional[BaseException] = None) -> None:
        """Record a failure and mark the entry invalid."""
        self.errors.append(ModelError(error_message, repr(exception) if exception is not None else None))
        self.validation_state = ModelValidationState.INVALID
