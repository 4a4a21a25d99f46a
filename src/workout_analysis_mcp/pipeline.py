"""Request-to-analysis pipeline shared by the MCP tool and direct callers."""

from __future__ import annotations

import logging

from .client import InferenceClient, InferenceConfig
from .config import get_config
from .contract import parse
from .metadata import synthesize
from .models.workout import AnalysisResult
from .platforms import extract_content_id, validate_url
from .prompts.workout import build_prompt
from .tracing import span

logger = logging.getLogger(__name__)


async def analyze(url: str, *, client: InferenceClient | None = None) -> AnalysisResult:
    """Validate *url*, query the model once, and return the parsed analysis.

    Stages run in order: validate → synthesize metadata → build prompt →
    completion → contract parse. Errors from any stage propagate unchanged.

    Args:
        url: Instagram, TikTok, or YouTube video URL.
        client: Inference client to use. When omitted, one is built from the
            live server config and closed before returning.

    Raises:
        ValidationError: If *url* is missing or unsupported (no model call is made).
        InferenceError: If the completion call fails.
        MalformedResponseError: If the completion is not usable JSON.
    """
    platform = validate_url(url)
    content_id = extract_content_id(url)
    logger.info("Processing analysis request for %s (%s %s)", url, platform.value, content_id)

    info = synthesize(url, platform)
    prompt = build_prompt(info)

    owned = client is None
    if client is None:
        client = InferenceClient(InferenceConfig.from_server_config(get_config()))
    try:
        with span(
            "inference",
            platform=platform.value,
            job_id=info.job_id,
            content_id=content_id,
        ):
            raw = await client.complete(prompt.system, prompt.user)
    finally:
        if owned:
            await client.aclose()

    with span("contract", span_type="PARSER", job_id=info.job_id) as live:
        result = parse(raw, info)
        if live is not None:
            live.set_attribute("workout_count", len(result.workouts))

    logger.info(
        "Analysis complete for %s: %d workout(s) (job %s)",
        url, len(result.workouts), info.job_id,
    )
    return result
