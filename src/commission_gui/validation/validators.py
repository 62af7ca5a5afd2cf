"""
Qt validators for the commission entry form fields.

This module wraps the pure checks from commission.validation in QValidator
subclasses and maps field messages to structured validation errors.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtGui import QValidator
from PySide6.QtWidgets import QWidget

from commission.errors import ErrorCode, ValidationError
from commission.rules import DEFAULT_NAME_POLICY, QUANTITY_BOUNDS, NamePolicy, QuantityField
from commission.validation import integer_value, is_integer, strip_whitespace, validate_name, validate_quantity


class EmployeeNameValidator(QValidator):
    """
    Validator for the employee name.

    Empty input is Intermediate so the user can start typing; any character
    outside the configured policy makes the input Invalid.
    """

    def __init__(self, policy: NamePolicy = DEFAULT_NAME_POLICY, parent: QWidget | None = None):
        super().__init__(parent)
        self.policy = policy

    def validate(self, input_text: str, pos: int) -> tuple[QValidator.State, str, int]:
        """Validate name input."""
        if not strip_whitespace(input_text):
            return QValidator.State.Intermediate, input_text, pos

        if validate_name(input_text, self.policy):
            return QValidator.State.Invalid, input_text, pos

        return QValidator.State.Acceptable, input_text, pos

    def error_message(self, input_text: str) -> str:
        return validate_name(input_text, self.policy)


class QuantityValidator(QValidator):
    """
    Validator for one of the locks, stocks or barrels counts.

    Out-of-bound integers are Intermediate rather than Invalid: "7" on the
    way to "70" must stay editable.
    """

    def __init__(self, quantity: QuantityField, parent: QWidget | None = None):
        super().__init__(parent)
        self.quantity = quantity
        self._bound = QUANTITY_BOUNDS[quantity]

    def bottom(self) -> int:
        return self._bound.minimum

    def top(self) -> int:
        return self._bound.maximum

    def validate(self, input_text: str, pos: int) -> tuple[QValidator.State, str, int]:
        """Validate quantity input with range checking."""
        text = strip_whitespace(input_text)
        if not text or text == "-":
            return QValidator.State.Intermediate, input_text, pos

        if not is_integer(text):
            return QValidator.State.Invalid, input_text, pos

        if not self._bound.contains(integer_value(text)):
            return QValidator.State.Intermediate, input_text, pos

        return QValidator.State.Acceptable, input_text, pos

    def error_message(self, input_text: str) -> str:
        return validate_quantity(input_text, self.quantity)


def create_validation_error(field: str, message: str, value: Any = None) -> ValidationError:
    """
    Create a ValidationError for logging purposes.

    Args:
        field: Field name that failed validation
        message: Validation error message
        value: The invalid value

    Returns:
        ValidationError instance
    """
    code = ErrorCode.INVALID_INPUT
    lowered = message.lower()

    if lowered.startswith("please enter") and "integer" not in lowered:
        code = ErrorCode.REQUIRED_FIELD_MISSING
    elif "integer" in lowered or "letters only" in lowered:
        code = ErrorCode.INVALID_FORMAT
    elif "between" in lowered:
        code = ErrorCode.VALUE_OUT_OF_RANGE

    return ValidationError(
        code=code,
        user_message=message,
        field=field,
        technical_message=f"Validation failed for field '{field}': {message}",
        context={"value": value} if value is not None else {},
    )
