"""
Tests for the commission field QValidators.

Tests cover:
- EmployeeNameValidator under both name policies
- QuantityValidator states and bounds
- create_validation_error code mapping
"""

import pytest
from PySide6.QtGui import QValidator

from commission.errors import ErrorCode
from commission.rules import NamePolicy, QuantityField
from commission_gui.validation.validators import (
    EmployeeNameValidator,
    QuantityValidator,
    create_validation_error,
)


class TestEmployeeNameValidator:
    """Test the EmployeeNameValidator."""

    def setup_method(self):
        self.validator = EmployeeNameValidator()

    @pytest.mark.parametrize("name", ["John Doe", "สมชาย", "Ken เคน"])
    def test_acceptable_names(self, name):
        state, text, pos = self.validator.validate(name, 3)

        assert state == QValidator.State.Acceptable
        assert text == name
        assert pos == 3

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_is_intermediate(self, name):
        state, _text, _pos = self.validator.validate(name, 0)

        assert state == QValidator.State.Intermediate

    @pytest.mark.parametrize("name", ["John123", "Test!"])
    def test_disallowed_characters_are_invalid(self, name):
        state, _text, _pos = self.validator.validate(name, 0)

        assert state == QValidator.State.Invalid
        assert self.validator.error_message(name) == "Name must be Thai or English letters only"

    def test_latin_only_policy(self):
        validator = EmployeeNameValidator(NamePolicy.LATIN_ONLY)

        state, _text, _pos = validator.validate("สมชาย", 0)

        assert state == QValidator.State.Invalid
        assert validator.error_message("สมชาย") == "Name must be English letters only"


class TestQuantityValidator:
    """Test the QuantityValidator."""

    def setup_method(self):
        self.validator = QuantityValidator(QuantityField.LOCKS)

    def test_bounds(self):
        assert self.validator.bottom() == 1
        assert self.validator.top() == 70
        assert QuantityValidator(QuantityField.BARRELS).top() == 90

    @pytest.mark.parametrize("value", ["1", "35", "70", " 70 "])
    def test_acceptable_values(self, value):
        state, _text, _pos = self.validator.validate(value, 0)

        assert state == QValidator.State.Acceptable

    @pytest.mark.parametrize("value", ["", "-", "0", "71", "-3"])
    def test_intermediate_values(self, value):
        state, _text, _pos = self.validator.validate(value, 0)

        assert state == QValidator.State.Intermediate

    @pytest.mark.parametrize("value", ["1.5", "abc", "12abc"])
    def test_invalid_values(self, value):
        state, _text, _pos = self.validator.validate(value, 0)

        assert state == QValidator.State.Invalid

    @pytest.mark.parametrize("value", ["9" * 5000, "-" + "9" * 5000])
    def test_oversized_values_are_intermediate(self, value):
        state, _text, _pos = self.validator.validate(value, 0)

        assert state == QValidator.State.Intermediate
        assert self.validator.error_message(value) == "Locks must be between 1 and 70"

    def test_unicode_spaces_are_trimmed(self):
        state, _text, _pos = self.validator.validate(chr(0x3000) + "12" + chr(0xFEFF), 0)

        assert state == QValidator.State.Acceptable

    def test_error_messages(self):
        assert self.validator.error_message("") == "Please enter Locks"
        assert self.validator.error_message("1.5") == "Please enter with integer or whole number"
        assert self.validator.error_message("71") == "Locks must be between 1 and 70"
        assert self.validator.error_message("7") == ""


class TestCreateValidationError:
    """Test mapping field messages to error codes."""

    @pytest.mark.parametrize(
        ("message", "code"),
        [
            ("Please enter Employee Name", ErrorCode.REQUIRED_FIELD_MISSING),
            ("Please enter Locks", ErrorCode.REQUIRED_FIELD_MISSING),
            ("Please enter with integer or whole number", ErrorCode.INVALID_FORMAT),
            ("Name must be Thai or English letters only", ErrorCode.INVALID_FORMAT),
            ("Stocks must be between 1 and 80", ErrorCode.VALUE_OUT_OF_RANGE),
            ("Validation error occurred", ErrorCode.INVALID_INPUT),
        ],
    )
    def test_code_mapping(self, message, code):
        error = create_validation_error("field", message)

        assert error.code == code
        assert error.user_message == message

    def test_field_and_value_context(self):
        error = create_validation_error("locks", "Locks must be between 1 and 70", "99")

        assert error.field == "locks"
        assert error.context["value"] == "99"
        assert error.technical_message == "Validation failed for field 'locks': Locks must be between 1 and 70"

    def test_no_value_context(self):
        error = create_validation_error("name", "Please enter Employee Name")

        assert "value" not in error.context
