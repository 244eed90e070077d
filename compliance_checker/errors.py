"""Exception types raised by the compliance pipeline.

Each error knows the HTTP status and the caller-safe message used when it
reaches the request handler. The exception message itself is only logged.
"""
from __future__ import annotations


class ComplianceCheckError(RuntimeError):
    """Base class for failures in any pipeline stage."""

    status_code = 500
    public_message = "Internal server error"


class InvalidURLError(ComplianceCheckError):
    """Raised when the request body does not carry a usable HTTP(S) URL."""

    status_code = 400
    public_message = "Invalid URL format"


class RenderError(ComplianceCheckError):
    """Raised when the target page cannot be loaded or read."""

    public_message = "Error rendering the page"


class UpstreamEvaluationError(ComplianceCheckError):
    """Raised when the completion service is unreachable or rejects the call."""

    public_message = "Error checking compliance"


class MalformedModelOutputError(ComplianceCheckError):
    """Raised when the model answered with text that is not the expected JSON."""

    public_message = "Invalid JSON response"
