"""
Real-time input validation for the commission entry form.

This package binds the commission field rules to Qt line edits with
immediate feedback and integration with the error handling system.
"""

from .input_validator import InputValidator
from .validators import (
    EmployeeNameValidator,
    QuantityValidator,
    create_validation_error,
)

__all__ = [
    "EmployeeNameValidator",
    "InputValidator",
    "QuantityValidator",
    "create_validation_error",
]
