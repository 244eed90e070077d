"""Request and response models shared across the service."""
from __future__ import annotations

import logging
import re
from typing import Any, List, Literal

from pydantic import BaseModel, ValidationError, field_validator

from .errors import InvalidURLError

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(
    r"https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"[-a-zA-Z0-9()@:%_+.~#?&/=]*"
)

ComplianceStatus = Literal["non-compliant", "partially-compliant"]


class ComplianceRequest(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def url_is_http(cls, value: str) -> str:
        if not URL_PATTERN.fullmatch(value):
            raise ValueError("url must be an absolute http(s) URL")
        return value


class ComplianceFinding(BaseModel):
    term_or_phrase: str
    compliance_status: ComplianceStatus
    explanation: str
    suggestions: str

    @field_validator("compliance_status", mode="before")
    @classmethod
    def normalise_status(cls, value: Any) -> Any:
        """Fold the spellings the model tends to use onto the canonical labels."""

        if not isinstance(value, str):
            return value
        normalised = re.sub(r"[\s_]+", "-", value.strip().lower())
        if normalised != value:
            logger.debug("Normalised compliance status '%s' to '%s'", value, normalised)
        return normalised


class ComplianceResult(BaseModel):
    findings: List[ComplianceFinding]


class ErrorResponse(BaseModel):
    error: str


def parse_compliance_request(body: Any) -> ComplianceRequest:
    """Validate a decoded request body, raising ``InvalidURLError`` on any problem."""

    if not isinstance(body, dict):
        raise InvalidURLError("request body must be a JSON object")
    try:
        return ComplianceRequest.model_validate(body)
    except ValidationError as exc:
        raise InvalidURLError(f"rejected request body: {exc.error_count()} error(s)") from exc
