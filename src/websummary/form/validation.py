"""Per-field validation results.

Validation is never an exception: a field is either ``Valid()`` or
``Invalid(error)``, and the error text is shown under the field when the form
is redisplayed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["FieldValidationResult", "Invalid", "Valid", "validate_value"]


@dataclass(frozen=True, slots=True)
class Valid:
    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    error: str

    @property
    def is_valid(self) -> bool:
        return False


FieldValidationResult = Valid | Invalid


def validate_value(value: Any) -> FieldValidationResult:
    """Run the value's own ``validate()`` if it has one; otherwise ``Valid()``."""
    method = getattr(value, "validate", None)
    if callable(method):
        result = method()
        if not isinstance(result, (Valid, Invalid)):
            msg = (
                f"{type(value).__name__}.validate() must return Valid or Invalid, "
                f"got {type(result).__name__}"
            )
            raise TypeError(msg)
        return result
    return Valid()
