"""
Input validation for the sales commission entry form.

The field checks are pure functions: they hold no state, perform no I/O and
report every problem as a plain message string (empty when the input is
valid). Nothing in this module raises for bad input.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from .rules import (
    DEFAULT_NAME_POLICY,
    EMPTY_FIELD_TEMPLATE,
    EMPTY_NAME_MESSAGE,
    NOT_INTEGER_MESSAGE,
    QUANTITY_BOUNDS,
    WHITESPACE,
    NamePolicy,
    QuantityField,
)

_INTEGER_PATTERN = re.compile(r"-?[0-9]+")
_LEADING_INTEGER_PATTERN = re.compile(f"[{WHITESPACE}]*([+-]?[0-9]+)")

# Every bound fits in a few digits; int() refuses literals past its digit limit
_MAX_QUANTITY_DIGITS = 9


def strip_whitespace(value: str) -> str:
    """Trim the characters listed in rules.WHITESPACE from both ends."""
    return value.strip(WHITESPACE)


def integer_value(literal: str) -> int | float:
    """
    Convert a signed integer literal to a number.

    Magnitudes longer than any bound could need become signed infinity,
    which every QuantityBound rejects.
    """
    negative = literal.startswith("-")
    digits = literal.lstrip("+-").lstrip("0") or "0"
    if len(digits) > _MAX_QUANTITY_DIGITS:
        return -math.inf if negative else math.inf
    return -int(digits) if negative else int(digits)


def is_integer(value: str) -> bool:
    """Check whether the trimmed text is an optionally negative integer literal."""
    return _INTEGER_PATTERN.fullmatch(strip_whitespace(value)) is not None


def validate_name(name: str, policy: NamePolicy = DEFAULT_NAME_POLICY) -> str:
    """
    Validate the employee name.

    Args:
        name: Raw name text as typed
        policy: Character policy to enforce

    Returns:
        Empty string when valid, otherwise the error message
    """
    if not strip_whitespace(name):
        return EMPTY_NAME_MESSAGE
    if policy.pattern.fullmatch(name) is None:
        return policy.message
    return ""


def validate_numeric_field(value: str, field_label: str) -> str:
    """
    Validate the format of one numeric field.

    Args:
        value: Raw field text
        field_label: Label shown in the "empty" message

    Returns:
        Empty string when valid, otherwise the error message
    """
    if not strip_whitespace(value):
        return EMPTY_FIELD_TEMPLATE.format(label=field_label)
    if not is_integer(value):
        return NOT_INTEGER_MESSAGE
    return ""


def validate_input_ranges(locks: float | None, stocks: float | None, barrels: float | None) -> list[str]:
    """
    Check the three quantities against their inclusive bounds.

    NaN or None counts as out of range. Messages come back in the order
    locks, stocks, barrels; in-range fields contribute nothing.
    """
    values = {
        QuantityField.LOCKS: locks,
        QuantityField.STOCKS: stocks,
        QuantityField.BARRELS: barrels,
    }
    return [bound.message for quantity, bound in QUANTITY_BOUNDS.items() if not bound.contains(values[quantity])]


def parse_quantity(value: str, default: float = math.nan) -> int | float:
    """
    Parse the leading integer of a raw quantity field.

    Leading whitespace and a sign are accepted and trailing text is ignored,
    so "12abc" parses to 12. Text without leading digits yields default.
    """
    match = _LEADING_INTEGER_PATTERN.match(value)
    if match is None:
        return default
    return integer_value(match.group(1))


def validate_quantity(value: str, quantity: QuantityField) -> str:
    """Single-field verdict: format problems first, then the field's bound."""
    error = validate_numeric_field(value, quantity.label)
    if error:
        return error

    bound = QUANTITY_BOUNDS[quantity]
    if not bound.contains(integer_value(strip_whitespace(value))):
        return bound.message
    return ""


@dataclass
class FormValidationResult:
    """Aggregated verdict for one submission of the entry form."""

    name: str
    locks: int | float
    stocks: int | float
    barrels: int | float
    field_errors: dict[str, str] = field(default_factory=dict)
    range_errors: list[str] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        """All messages: field errors in form order, then range errors."""
        return [message for message in self.field_errors.values() if message] + self.range_errors

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_form(
    name: str,
    locks: str,
    stocks: str,
    barrels: str,
    policy: NamePolicy = DEFAULT_NAME_POLICY,
) -> FormValidationResult:
    """
    Validate every input of the entry form.

    Unparsable quantities become 0 before the range check, so an empty or
    malformed field reports both its format error and its range error.
    Oversized literals parse to signed infinity and fail their bound.

    Args:
        name: Raw employee name
        locks: Raw locks count
        stocks: Raw stocks count
        barrels: Raw barrels count
        policy: Character policy for the name

    Returns:
        FormValidationResult with per-field errors and parsed values
    """
    field_errors = {
        "name": validate_name(name, policy),
        QuantityField.LOCKS.value: validate_numeric_field(locks, QuantityField.LOCKS.label),
        QuantityField.STOCKS.value: validate_numeric_field(stocks, QuantityField.STOCKS.label),
        QuantityField.BARRELS.value: validate_numeric_field(barrels, QuantityField.BARRELS.label),
    }

    parsed_locks = parse_quantity(locks, default=0)
    parsed_stocks = parse_quantity(stocks, default=0)
    parsed_barrels = parse_quantity(barrels, default=0)

    return FormValidationResult(
        name=strip_whitespace(name),
        locks=parsed_locks,
        stocks=parsed_stocks,
        barrels=parsed_barrels,
        field_errors=field_errors,
        range_errors=validate_input_ranges(parsed_locks, parsed_stocks, parsed_barrels),
    )
