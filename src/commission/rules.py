"""
Shared rule declarations for the sales commission entry form.

Bounds, name policies and message templates are declared here once and
referenced by the local validators, the Qt field validators and the JSON
Schema documents describing the remote commission endpoint.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


class QuantityField(Enum):
    """The three numeric sales-count inputs, in display order."""

    LOCKS = "locks"
    STOCKS = "stocks"
    BARRELS = "barrels"

    @property
    def label(self) -> str:
        """Display label used in user-facing messages."""
        return self.value.capitalize()


class NamePolicy(Enum):
    """Character policy applied to the employee name."""

    LATIN_THAI = "latin_thai"
    LATIN_ONLY = "latin_only"

    @property
    def pattern(self) -> re.Pattern[str]:
        return _NAME_PATTERNS[self]

    @property
    def message(self) -> str:
        """Message returned when a name contains disallowed characters."""
        return _NAME_MESSAGES[self]


# ECMAScript WhiteSpace and LineTerminator characters; str.strip() and re's \s
# disagree with this set on U+001C..U+001F, U+0085 and U+FEFF
WHITESPACE = "\t\n\v\f\r " + "".join(
    chr(code) for code in (0x00A0, 0x1680, *range(0x2000, 0x200B), 0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF)
)

# Thai block is U+0E00..U+0E7F
_THAI_RANGE = f"{chr(0x0E00)}-{chr(0x0E7F)}"

_NAME_PATTERNS: dict[NamePolicy, re.Pattern[str]] = {
    NamePolicy.LATIN_THAI: re.compile(f"[a-zA-Z{_THAI_RANGE}{WHITESPACE}]+"),
    NamePolicy.LATIN_ONLY: re.compile(f"[a-zA-Z{WHITESPACE}]+"),
}

_NAME_MESSAGES: dict[NamePolicy, str] = {
    NamePolicy.LATIN_THAI: "Name must be Thai or English letters only",
    NamePolicy.LATIN_ONLY: "Name must be English letters only",
}

DEFAULT_NAME_POLICY = NamePolicy.LATIN_THAI

# Message templates
EMPTY_NAME_MESSAGE = "Please enter Employee Name"
EMPTY_FIELD_TEMPLATE = "Please enter {label}"
NOT_INTEGER_MESSAGE = "Please enter with integer or whole number"
OUT_OF_RANGE_TEMPLATE = "{label} must be between {minimum} and {maximum}"


@dataclass(frozen=True)
class QuantityBound:
    """Inclusive bound for one quantity field."""

    field: QuantityField
    minimum: int
    maximum: int

    def contains(self, value: float | None) -> bool:
        """Return True when value lies inside the bound; None and NaN never do."""
        if value is None or (isinstance(value, float) and math.isnan(value)):
            return False
        return self.minimum <= value <= self.maximum

    @property
    def message(self) -> str:
        return OUT_OF_RANGE_TEMPLATE.format(label=self.field.label, minimum=self.minimum, maximum=self.maximum)


QUANTITY_BOUNDS: dict[QuantityField, QuantityBound] = {
    QuantityField.LOCKS: QuantityBound(QuantityField.LOCKS, 1, 70),
    QuantityField.STOCKS: QuantityBound(QuantityField.STOCKS, 1, 80),
    QuantityField.BARRELS: QuantityBound(QuantityField.BARRELS, 1, 90),
}


def _quantity_properties() -> dict[str, Any]:
    return {
        bound.field.value: {
            "type": "integer",
            "minimum": bound.minimum,
            "maximum": bound.maximum,
        }
        for bound in QUANTITY_BOUNDS.values()
    }


# JSON Schema for the body of POST /api/commission/calculate (draft-07)
COMMISSION_REQUEST_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Commission calculation request",
    "type": "object",
    "required": ["name", *(field.value for field in QuantityField)],
    "additionalProperties": False,
    "properties": {
        "name": {"type": "string", "minLength": 1},
        **_quantity_properties(),
    },
}

# JSON Schema for the endpoint reply (draft-07)
COMMISSION_RESPONSE_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Commission calculation response",
    "type": "object",
    "required": ["success"],
    "properties": {
        "success": {"type": "boolean"},
        "data": {
            "type": "object",
            "required": ["name", *(field.value for field in QuantityField), "sales", "commission"],
            "properties": {
                "name": {"type": "string"},
                **_quantity_properties(),
                "sales": {"type": "number"},
                "commission": {"type": "number"},
            },
        },
        "errors": {"type": "array", "items": {"type": "string"}},
    },
}
