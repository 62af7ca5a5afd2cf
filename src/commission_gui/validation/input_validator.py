"""
Real-time input validation manager for the commission entry form.

This module provides centralized field validation with debouncing,
error styling, and integration with the error handling system.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtGui import QValidator
from PySide6.QtWidgets import QLineEdit

from commission.config import DEFAULT_CONFIG
from commission.error_handler import get_error_handler
from commission.rules import DEFAULT_NAME_POLICY, NamePolicy, QuantityField
from commission.validation import (
    FormValidationResult,
    strip_whitespace,
    validate_form,
    validate_name,
    validate_quantity,
)

from .validators import create_validation_error

# A callable validator returns an error message, or "" when the value is valid
MessageValidator = Callable[[str], str]

FORM_FIELDS = ("name", *(quantity.value for quantity in QuantityField))


class FieldValidator:
    """Configuration and last known state for a single field."""

    def __init__(
        self,
        widget: QLineEdit,
        validator: QValidator | MessageValidator,
        required: bool = True,
    ):
        self.widget = widget
        self.validator = validator
        self.required = required
        self.last_value: str | None = None
        self.last_error_message = ""
        self.is_valid = not required  # Start as valid if not required
        self.timer = QTimer()
        self.timer.setSingleShot(True)


class InputValidator(QObject):
    """
    Centralized real-time input validation manager.

    Provides debounced validation, error styling, and reporting of field
    errors to the error handler.
    """

    # Signals
    fieldValidityChanged = Signal(str, bool, str)  # key, valid, message
    overallValidityChanged = Signal(bool)  # overall_valid

    def __init__(self, parent: QObject | None = None, debounce_delay: int = DEFAULT_CONFIG["debounce_ms"]):
        super().__init__(parent)
        self._logger = logging.getLogger(__name__)
        self._fields: dict[str, FieldValidator] = {}
        self._debounce_delay = debounce_delay  # milliseconds
        self._name_policy = DEFAULT_NAME_POLICY
        self._error_handler = get_error_handler()

    def register_field(
        self,
        key: str,
        widget: QLineEdit,
        validator: QValidator | MessageValidator,
        required: bool = True,
    ) -> None:
        """
        Register a field for validation.

        Args:
            key: Unique identifier for the field
            widget: The line edit to validate
            validator: QValidator instance or callable returning an error message
            required: Whether the field is required
        """
        field_validator = FieldValidator(widget, validator, required)
        field_validator.timer.timeout.connect(lambda: self._validate_field(key))

        self._fields[key] = field_validator

        widget.textChanged.connect(lambda _text: self._schedule_validation(key))
        widget.editingFinished.connect(lambda: self._validate_field_immediately(key))

        if widget.toolTip():
            widget.setProperty("originalToolTip", widget.toolTip())

        # Initial validation
        self._validate_field(key)

    def register_commission_form(
        self,
        name_edit: QLineEdit,
        locks_edit: QLineEdit,
        stocks_edit: QLineEdit,
        barrels_edit: QLineEdit,
        policy: NamePolicy = DEFAULT_NAME_POLICY,
    ) -> None:
        """
        Register the four inputs of the commission entry form.

        Args:
            name_edit: Employee name input
            locks_edit: Locks count input
            stocks_edit: Stocks count input
            barrels_edit: Barrels count input
            policy: Character policy for the employee name
        """
        self._name_policy = policy
        self.register_field("name", name_edit, partial(validate_name, policy=policy))

        edits = (locks_edit, stocks_edit, barrels_edit)
        for quantity, edit in zip(QuantityField, edits, strict=True):
            self.register_field(quantity.value, edit, partial(validate_quantity, quantity=quantity))

    def _schedule_validation(self, key: str) -> None:
        """Schedule validation for a field with debouncing."""
        if key not in self._fields:
            return

        self._fields[key].timer.start(self._debounce_delay)

    def _validate_field_immediately(self, key: str) -> None:
        """Validate a field immediately (bypass debouncing)."""
        if key not in self._fields:
            return

        self._fields[key].timer.stop()
        self._validate_field(key)

    def _validate_field(self, key: str) -> None:
        """Perform validation for a specific field."""
        if key not in self._fields:
            return

        field = self._fields[key]
        current_value = field.widget.text()

        if current_value == field.last_value:
            return

        field.last_value = current_value
        is_valid, error_message = self._perform_validation(field, current_value)
        field.is_valid = is_valid

        if error_message != field.last_error_message:
            field.last_error_message = error_message
            self._update_field_styling(field.widget, is_valid, error_message)
            self.fieldValidityChanged.emit(key, is_valid, error_message)

            if not is_valid and error_message:
                self._error_handler.handle(create_validation_error(key, error_message, current_value))

        self._check_overall_validity()

    def _perform_validation(self, field: FieldValidator, value: str) -> tuple[bool, str]:
        """Perform the actual validation logic."""
        if isinstance(field.validator, QValidator):
            if not strip_whitespace(value):
                return (False, "This field is required") if field.required else (True, "")

            result = field.validator.validate(value, 0)
            state = QValidator.State(result[0])  # type: ignore[index]
            if state == QValidator.State.Acceptable:
                return True, ""
            return False, self._get_validator_error_message(field.validator, value)

        # Callable validators report emptiness themselves
        if not strip_whitespace(value) and not field.required:
            return True, ""

        try:
            message = field.validator(value)
        except Exception as e:
            self._logger.error(f"Validation error for field: {e}")
            self._error_handler.handle(e, {"value": value})
            return False, "Validation error occurred"

        return not message, message

    def _get_validator_error_message(self, validator: QValidator, value: str) -> str:
        """Get an appropriate error message for a validator."""
        error_message = getattr(validator, "error_message", None)
        if callable(error_message):
            message = error_message(value)
            if message:
                return str(message)

        bottom = getattr(validator, "bottom", None)
        top = getattr(validator, "top", None)
        if callable(bottom) and callable(top):
            return f"Value must be between {bottom()} and {top()}"
        return "Invalid input format"

    def _update_field_styling(self, widget: QLineEdit, is_valid: bool, error_message: str) -> None:
        """Update the styling of a field based on validation state."""
        # Block signals to prevent recursion
        widget.blockSignals(True)

        try:
            if is_valid:
                self._clear_field_error(widget)
            else:
                self._set_field_error(widget, error_message)
        finally:
            widget.blockSignals(False)

    def _set_field_error(self, widget: QLineEdit, message: str) -> None:
        """Mark a field as having an error and show feedback."""
        widget.setProperty("hasError", True)
        widget.setToolTip(f"Error: {message}")
        widget.style().polish(widget)

    def _clear_field_error(self, widget: QLineEdit) -> None:
        """Clear error state from a field."""
        widget.setProperty("hasError", False)
        widget.setToolTip(widget.property("originalToolTip") or "")
        widget.style().polish(widget)

    def _check_overall_validity(self) -> None:
        """Emit the overall validation state."""
        self.overallValidityChanged.emit(all(field.is_valid for field in self._fields.values()))

    def validate_now(self, key: str) -> bool:
        """
        Validate a specific field immediately.

        Args:
            key: Field identifier

        Returns:
            True if valid, False otherwise
        """
        if key in self._fields:
            self._validate_field_immediately(key)
            return self._fields[key].is_valid
        return True

    def validate_all(self) -> bool:
        """
        Validate all registered fields immediately.

        Returns:
            True if all fields are valid, False otherwise
        """
        for key in self._fields:
            self._validate_field_immediately(key)

        return all(field.is_valid for field in self._fields.values())

    def force_validate_before_submit(self) -> bool:
        """
        Force validation of all fields before an entry is submitted.

        Returns:
            True if all fields are valid and the entry can be sent
        """
        return self.validate_all()

    def form_result(self) -> FormValidationResult:
        """
        Aggregate the commission form fields into a FormValidationResult.

        Raises:
            KeyError: If the commission form has not been registered
        """
        name, locks, stocks, barrels = (self._fields[key].widget.text() for key in FORM_FIELDS)
        return validate_form(name, locks, stocks, barrels, self._name_policy)

    def is_field_valid(self, key: str) -> bool:
        """Check if a specific field is valid; unknown keys count as valid."""
        if key in self._fields:
            return self._fields[key].is_valid
        return True

    def get_field_error(self, key: str) -> str:
        """
        Get the error message for a specific field.

        Args:
            key: Field identifier

        Returns:
            Error message or empty string if valid
        """
        if key in self._fields:
            return self._fields[key].last_error_message
        return ""

    def cleanup(self) -> None:
        """Clean up resources and disconnect signals."""
        for field in self._fields.values():
            field.timer.stop()
            field.timer.deleteLater()

        self._fields.clear()
