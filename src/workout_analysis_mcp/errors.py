"""Pipeline error taxonomy, classification, and tool error model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

ANALYSIS_FAILED_MESSAGE = "Failed to analyze workout video"


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    URL_INVALID = "URL_INVALID"
    URL_UNSUPPORTED = "URL_UNSUPPORTED"
    CONFIG_MISSING = "CONFIG_MISSING"
    API_PERMISSION_DENIED = "API_PERMISSION_DENIED"
    API_QUOTA_EXCEEDED = "API_QUOTA_EXCEEDED"
    API_INVALID_ARGUMENT = "API_INVALID_ARGUMENT"
    NETWORK_ERROR = "NETWORK_ERROR"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
    RESPONSE_MALFORMED = "RESPONSE_MALFORMED"
    UNKNOWN = "UNKNOWN"


class PipelineError(Exception):
    """Base class for every failure raised by the analysis pipeline."""

    category: ErrorCategory = ErrorCategory.UNKNOWN


class ValidationError(PipelineError):
    """URL is missing or does not match a supported platform structure.

    Raised before any inference cost is incurred.
    """

    category = ErrorCategory.URL_INVALID

    def __init__(self, message: str, *, category: ErrorCategory | None = None) -> None:
        super().__init__(message)
        if category is not None:
            self.category = category


class InferenceError(PipelineError):
    """Upstream completion call failed, timed out, or returned no content."""

    category = ErrorCategory.ANALYSIS_FAILED


class ConfigurationError(InferenceError):
    """Inference credential or settings are missing at first use."""

    category = ErrorCategory.CONFIG_MISSING


class MalformedResponseError(PipelineError):
    """Completion succeeded but its content is not a usable JSON object."""

    category = ErrorCategory.RESPONSE_MALFORMED

    def __init__(self, message: str, *, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    success: bool = False
    error: str
    category: str
    hint: str
    retryable: bool = False
    retry_after_seconds: int | None = None


def _categorize_upstream(message: str) -> tuple[ErrorCategory, str] | None:
    """Refine an inference failure from the upstream message, if recognisable."""
    s = message.lower()
    if "403" in s or "permission" in s or "api key not valid" in s:
        return (
            ErrorCategory.API_PERMISSION_DENIED,
            "API key rejected — check GEMINI_API_KEY",
        )
    if "429" in s or "quota" in s or "resource_exhausted" in s:
        return (
            ErrorCategory.API_QUOTA_EXCEEDED,
            "Rate limit hit — wait and retry",
        )
    if "timeout" in s or "timed out" in s:
        return (
            ErrorCategory.NETWORK_ERROR,
            "Model call timed out — try again or raise WORKOUT_TIMEOUT_SECONDS",
        )
    if "400" in s:
        return (
            ErrorCategory.API_INVALID_ARGUMENT,
            "Upstream rejected the request — check model and generation settings",
        )
    return None


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint."""
    if isinstance(error, ValidationError):
        if error.category == ErrorCategory.URL_UNSUPPORTED:
            return (
                error.category,
                "Provide a post/reel/tv, @handle/video/<id>, watch?v= or youtu.be link",
            )
        return (
            ErrorCategory.URL_INVALID,
            "Provide a valid Instagram, TikTok, or YouTube URL",
        )
    if isinstance(error, ConfigurationError):
        return (
            ErrorCategory.CONFIG_MISSING,
            "Set GEMINI_API_KEY in the environment or ~/.config/workout-analysis-mcp/.env",
        )
    if isinstance(error, MalformedResponseError):
        return (
            ErrorCategory.RESPONSE_MALFORMED,
            "Model returned an unusable response — try again",
        )
    if isinstance(error, InferenceError):
        refined = _categorize_upstream(str(error))
        if refined is not None:
            return refined
        return (ErrorCategory.ANALYSIS_FAILED, "Model call failed — try again")
    if isinstance(error, TimeoutError):
        return (
            ErrorCategory.NETWORK_ERROR,
            "Request timed out — try again or check connectivity",
        )

    return (ErrorCategory.UNKNOWN, str(error))


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception.

    Validation failures keep their message. Every other failure is reported as
    a generic analysis failure; the upstream message is appended for
    diagnostics but no other internal detail leaves the server.
    """
    cat, hint = categorize_error(error)
    if isinstance(error, ValidationError):
        message = str(error)
    else:
        detail = str(error)
        message = f"{ANALYSIS_FAILED_MESSAGE}: {detail}" if detail else ANALYSIS_FAILED_MESSAGE
    retryable = cat in {
        ErrorCategory.API_QUOTA_EXCEEDED,
        ErrorCategory.NETWORK_ERROR,
        ErrorCategory.RESPONSE_MALFORMED,
    }
    return ToolError(
        error=message,
        category=cat.value,
        hint=hint,
        retryable=retryable,
        retry_after_seconds=60 if cat == ErrorCategory.API_QUOTA_EXCEEDED else None,
    ).model_dump(mode="json")
