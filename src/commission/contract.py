"""
Contract of the remote commission calculation endpoint.

Builds the request body from a validated form and checks endpoint replies
against the JSON Schemas declared in rules.py, so the local checks and the
remote contract share one set of bounds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import jsonschema

from .errors import ContractError, ErrorCode, ValidationError
from .rules import COMMISSION_REQUEST_SCHEMA, COMMISSION_RESPONSE_SCHEMA
from .validation import FormValidationResult

logger = logging.getLogger(__name__)

ENDPOINT_PATH = "/api/commission/calculate"
UNKNOWN_SERVER_ERROR = "Unknown error from server"


@dataclass
class CommissionData:
    """Figures computed by the endpoint for one entry."""

    name: str
    locks: int
    stocks: int
    barrels: int
    sales: float
    commission: float


@dataclass
class CommissionResponse:
    """Parsed endpoint reply."""

    success: bool
    data: CommissionData | None = None
    errors: list[str] = field(default_factory=list)

    def messages(self) -> list[str]:
        """Server-side errors to show for an unsuccessful reply."""
        if self.success and self.data is not None:
            return []
        return self.errors or [UNKNOWN_SERVER_ERROR]


def build_request(result: FormValidationResult) -> dict[str, Any]:
    """
    Build the JSON body for the commission endpoint.

    Args:
        result: Outcome of validate_form for the submitted entry

    Returns:
        Request body with name, locks, stocks and barrels

    Raises:
        ValidationError: If the form did not pass local validation
        ContractError: If the body does not satisfy the request schema
    """
    if not result.is_valid:
        raise ValidationError(
            code=ErrorCode.INVALID_INPUT,
            user_message=result.errors[0],
            technical_message=f"Refusing to submit entry with {len(result.errors)} validation error(s)",
            context={"errors": result.errors},
        )

    body = {
        "name": result.name,
        "locks": result.locks,
        "stocks": result.stocks,
        "barrels": result.barrels,
    }

    try:
        jsonschema.validate(body, COMMISSION_REQUEST_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ContractError("Entry does not match the commission request contract", technical_message=e.message) from e

    logger.debug(f"Built commission request for {result.name!r}")
    return body


def parse_response(payload: dict[str, Any]) -> CommissionResponse:
    """
    Validate and parse an endpoint reply.

    Args:
        payload: Decoded JSON reply

    Returns:
        CommissionResponse

    Raises:
        ContractError: If the reply does not satisfy the response schema
    """
    try:
        jsonschema.validate(payload, COMMISSION_RESPONSE_SCHEMA)
    except jsonschema.ValidationError as e:
        logger.warning(f"Malformed commission reply: {e.message}")
        raise ContractError("Unexpected reply from the commission service", technical_message=e.message) from e

    data = payload.get("data")
    return CommissionResponse(
        success=payload["success"],
        data=CommissionData(**{key: data[key] for key in CommissionData.__dataclass_fields__}) if data else None,
        errors=list(payload.get("errors") or []),
    )
