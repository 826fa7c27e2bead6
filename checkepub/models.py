"""Pydantic data models for lint results and the lint API response."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

# Raw EPUBCheck message returned by the API, e.g.
# "PKG-008, FATAL, [Unable to read file 'error in opening zip file'.], epubJae5gW.epub"
ValidationMessage = str


class ValidationStatus(str, Enum):
    VALID = "Valid"
    INVALID = "Invalid"


# ---------------------------------------------------------------------------
# Check result
# ---------------------------------------------------------------------------


class Result(BaseModel):
    """Outcome of validating one EPUB file.

    ``errors`` is a tuple and always empty for a valid file. An invalid file
    normally carries at least one error, but none is accepted.
    """

    model_config = ConfigDict(frozen=True)

    status: ValidationStatus
    errors: tuple[ValidationMessage, ...] = ()

    @model_validator(mode="after")
    def valid_has_no_errors(self) -> Result:
        if self.status is ValidationStatus.VALID and self.errors:
            raise ValueError("a valid result cannot carry errors")
        return self

    @classmethod
    def valid(cls) -> Result:
        return cls(status=ValidationStatus.VALID)

    @classmethod
    def invalid(cls, errors: Iterable[ValidationMessage]) -> Result:
        return cls(status=ValidationStatus.INVALID, errors=tuple(errors))

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALID

    def __str__(self) -> str:
        if self.is_valid:
            return "OK"
        return "\n".join(["Invalid:", *self.errors])


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


class LintResponse(BaseModel):
    """JSON body returned by the lint API: ``{"success": bool, "messages": [...]}``."""

    model_config = ConfigDict(strict=True, extra="ignore")

    # A missing "success" reads as false, so the file is reported invalid.
    success: bool = False
    messages: list[ValidationMessage] | None = None
