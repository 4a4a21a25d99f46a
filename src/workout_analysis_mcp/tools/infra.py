"""Infrastructure tools — 1 tool on a FastMCP sub-server."""

from __future__ import annotations

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..config import get_config
from ..tracing import trace

infra_server = FastMCP("infra")
_SENSITIVE_CONFIG_FIELDS = {"gemini_api_key"}


def _redacted_config() -> dict:
    """Return runtime config with secret-bearing fields removed."""
    return get_config().model_dump(exclude=_SENSITIVE_CONFIG_FIELDS)


@infra_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
@trace(name="infra_status", span_type="TOOL")
async def infra_status() -> dict:
    """Report that the workout analysis server is up, with its configuration.

    The API key is never returned; ``api_key_configured`` says whether one is set.

    Returns:
        Dict with ``success``, ``message``, ``api_key_configured`` and ``config``.
    """
    return {
        "success": True,
        "message": "Workout Analysis server is running",
        "api_key_configured": bool(get_config().gemini_api_key),
        "config": _redacted_config(),
    }
