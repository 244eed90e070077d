"""OpenAI client helpers for the compliance review."""
from __future__ import annotations

import json
import logging
import os
import re
import time

from openai import APIError, AsyncOpenAI
from pydantic import ValidationError

from .errors import MalformedModelOutputError, UpstreamEvaluationError
from .schemas import ComplianceResult

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 60.0

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _api_key() -> str | None:
    # OPEN_AI_KEY is the name older deployments were configured with.
    return os.getenv("OPENAI_API_KEY") or os.getenv("OPEN_AI_KEY")


def _model_name() -> str:
    """Return the configured OpenAI model name."""

    value = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
    return value.strip() or DEFAULT_MODEL


def _request_timeout() -> float:
    raw = os.getenv("OPENAI_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        logger.warning(
            "Invalid OPENAI_TIMEOUT_SECONDS value %s; falling back to %s",
            raw,
            DEFAULT_TIMEOUT_SECONDS,
        )
        return DEFAULT_TIMEOUT_SECONDS
    if value <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return value


def _get_openai_client() -> AsyncOpenAI:
    api_key = _api_key()
    if not api_key:
        raise UpstreamEvaluationError("OPENAI_API_KEY is not configured.")
    # Failed completions are reported to the caller rather than retried.
    return AsyncOpenAI(api_key=api_key, timeout=_request_timeout(), max_retries=0)


async def _call_compliance_model(prompt: str) -> str:
    client = _get_openai_client()
    model = _model_name()
    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )
    except APIError as exc:
        raise UpstreamEvaluationError(f"Completion request to {model} failed: {exc}") from exc
    finally:
        await client.close()
    if not response.choices:
        raise MalformedModelOutputError(f"Completion from {model} returned no choices")
    content = response.choices[0].message.content or ""
    logger.debug("LLM compliance response: %s", content)
    return content


def strip_code_fences(content: str) -> str:
    """Remove Markdown code-fence markers wrapped around a JSON reply."""
    return _CODE_FENCE.sub("", content).strip()


def parse_compliance_response(content: str) -> ComplianceResult:
    json_text = strip_code_fences(content)
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise MalformedModelOutputError(f"Invalid JSON from LLM: {exc}") from exc
    try:
        return ComplianceResult.model_validate(data)
    except ValidationError as exc:
        raise MalformedModelOutputError(f"LLM response did not match schema: {exc}") from exc


async def evaluate_compliance(prompt: str) -> ComplianceResult:
    """Send the prompt to the model and return its validated findings."""

    start = time.perf_counter()
    content = await _call_compliance_model(prompt)
    result = parse_compliance_response(content)
    logger.info(
        "Compliance evaluation produced %d findings in %.2fs",
        len(result.findings),
        time.perf_counter() - start,
    )
    return result
