"""FastAPI application entrypoint."""
from __future__ import annotations

import json
import logging
import os
import time

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from .errors import ComplianceCheckError
from .llm import evaluate_compliance
from .logging_setup import configure_logging
from .policy import load_policy_document
from .prompts import build_compliance_prompt
from .renderer import PageRenderer
from .schemas import ComplianceResult, ErrorResponse, parse_compliance_request

LOG_FILE_PATH = configure_logging(os.getenv("LOG_LEVEL"))
logger = logging.getLogger(__name__)
logger.info("Logging configured. File output: %s", LOG_FILE_PATH)

app = FastAPI(title="Webpage Compliance Checker")

renderer = PageRenderer()

INDEX_TEXT = (
    "Webpage Compliance Checker\n"
    "POST /api/check-compliance with {\"url\": \"https://...\"} to review a page "
    "against the compliance policy.\n"
)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await renderer.shutdown()


@app.get("/", response_class=PlainTextResponse)
def index() -> str:
    return INDEX_TEXT


async def check_compliance(url: str) -> ComplianceResult:
    """Render ``url`` and ask the model which phrases break the policy."""

    start = time.perf_counter()
    page_text = await renderer.render(url)
    logger.debug("Rendered text for %s: %s", url, page_text)
    prompt = build_compliance_prompt(page_text, load_policy_document())
    result = await evaluate_compliance(prompt)
    logger.info(
        "Compliance check for %s finished with %d findings in %.2fs",
        url,
        len(result.findings),
        time.perf_counter() - start,
    )
    return result


@app.post(
    "/api/check-compliance",
    response_model=ComplianceResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def check_compliance_endpoint(request: Request):
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    try:
        compliance_request = parse_compliance_request(body)
        result = await check_compliance(compliance_request.url)
    except ComplianceCheckError as exc:
        if exc.status_code < 500:
            logger.info("Rejected compliance request: %s", exc)
        else:
            logger.error("Compliance check failed (%s): %s", type(exc).__name__, exc)
        return _error_response(exc.status_code, exc.public_message)
    except Exception as exc:
        logger.exception("Unexpected error during compliance check: %s", exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
    return result


def run() -> None:
    """Serve the application with uvicorn using ``HOST``/``PORT``."""

    import uvicorn

    port = int(os.getenv("PORT", "3000") or 3000)
    host = os.getenv("HOST", "0.0.0.0")
    logger.info("Server starting on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":  # pragma: no cover - manual script usage
    run()
