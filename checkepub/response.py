"""Lint API response parsing."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from checkepub.errors import DecodeError
from checkepub.models import LintResponse, Result

logger = logging.getLogger(__name__)


def parse_response(body: bytes | str) -> Result:
    """Decode a lint API response body into a Result.

    ``success: true`` yields a valid Result and any messages are ignored.
    ``success: false`` or no ``success`` key yields an invalid Result with
    the messages in order; missing or null ``messages`` count as no messages.

    Raises:
        DecodeError: If the body is not JSON or does not fit the schema.
    """
    try:
        response = LintResponse.model_validate_json(body)
    except ValidationError as exc:
        logger.warning("response_decode_failed", extra={"error": str(exc)})
        raise DecodeError(str(exc)) from exc

    if response.success:
        return Result.valid()
    return Result.invalid(response.messages or ())
