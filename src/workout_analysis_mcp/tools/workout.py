"""Workout analysis tool — 1 tool on a FastMCP sub-server."""

from __future__ import annotations

import logging

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..errors import MalformedResponseError, PipelineError, ValidationError, make_tool_error
from ..pipeline import analyze
from ..tracing import trace
from ..types import WorkoutVideoUrl

logger = logging.getLogger(__name__)
workout_server = FastMCP("workout")


@workout_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    )
)
@trace(name="workout_analyze", span_type="TOOL")
async def workout_analyze(url: WorkoutVideoUrl | None = None) -> dict:
    """Analyze a social-media workout video and list its exercises.

    Returns exercise names (as written on screen when available), sets/reps,
    exercise type, muscle groups, estimated duration, difficulty and
    confidence, plus the video's URL, title, thumbnail, platform and creator.

    Args:
        url: Instagram, TikTok, or YouTube video URL.

    Returns:
        Dict with ``success: true`` and the analysis, or a tool-error dict
        with ``success: false``.
    """
    try:
        result = await analyze(url)
    except ValidationError as exc:
        logger.info("Rejected URL %r: %s", url, exc)
        return make_tool_error(exc)
    except MalformedResponseError as exc:
        logger.warning("Analysis failed for %s: malformed response", url)
        return make_tool_error(exc)
    except PipelineError as exc:
        logger.error("Analysis failed for %s: %s", url, exc)
        return make_tool_error(exc)
    except Exception as exc:
        logger.exception("Unexpected failure analyzing %s", url)
        return make_tool_error(exc)
    return {"success": True, **result.to_wire()}
