"""Response contract: turn raw model text into an AnalysisResult.

Two defaulting rules apply and nothing else is forgiven:

- ``workouts`` becomes ``[]`` when missing or not an array.
- ``videoTitle`` falls back to the synthesized title when missing or empty.

Each workout entry must be a JSON object. Its fields are kept exactly as the
model reported them: nothing is coerced, clamped or filled in.

Fields the pipeline already knows (URL, platform, thumbnail, creator) are
never read from the model.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Literal, Union

from pydantic import ValidationError as SchemaValidationError

from .errors import MalformedResponseError
from .models.workout import AnalysisResult, VideoInfo, WorkoutAnalysisResponse

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 200


@dataclass(frozen=True)
class ContractValid:
    response: WorkoutAnalysisResponse
    status: Literal["valid"] = "valid"


@dataclass(frozen=True)
class ContractMalformed:
    reason: str
    raw: str
    status: Literal["malformed"] = "malformed"


ContractOutcome = Union[ContractValid, ContractMalformed]


def _normalize_workouts(data: dict[str, Any]) -> dict[str, Any]:
    """Replace a missing or non-array ``workouts`` value with ``[]``."""
    if isinstance(data.get("workouts"), list):
        return data
    if "workouts" in data:
        logger.debug("Discarding non-array workouts value: %r", data["workouts"])
    return {**data, "workouts": []}


def validate_response(raw: str) -> ContractOutcome:
    """Check *raw* against the response schema without raising."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        return ContractMalformed(reason=f"not valid JSON ({exc})", raw=raw)

    if not isinstance(data, dict):
        return ContractMalformed(
            reason=f"expected a JSON object, got {type(data).__name__}", raw=raw,
        )

    try:
        response = WorkoutAnalysisResponse.model_validate(_normalize_workouts(data))
    except SchemaValidationError as exc:
        return ContractMalformed(
            reason=f"schema mismatch ({exc.error_count()} error(s)): {exc.errors()[0]['msg']}",
            raw=raw,
        )
    return ContractValid(response=response)


def build_result(response: WorkoutAnalysisResponse, fallback: VideoInfo) -> AnalysisResult:
    """Merge a validated model response with the pipeline's own VideoInfo."""
    return AnalysisResult(
        workouts=response.workouts,
        video_url=fallback.url,
        video_title=response.video_title or fallback.metadata.title,
        thumbnail_url=fallback.metadata.thumbnail_url,
        platform=fallback.platform,
        creator=fallback.metadata.creator,
    )


def parse(raw: str, fallback: VideoInfo) -> AnalysisResult:
    """Parse model output into an AnalysisResult.

    Raises:
        MalformedResponseError: If *raw* is not a JSON object matching the
            response schema. No partial result is returned.
    """
    outcome = validate_response(raw)
    if isinstance(outcome, ContractMalformed):
        logger.warning(
            "Malformed model response for %s: %s (%r)",
            fallback.url, outcome.reason, raw[:_PREVIEW_CHARS],
        )
        raise MalformedResponseError(
            f"Model returned a malformed response: {outcome.reason}", raw=raw,
        )
    return build_result(outcome.response, fallback)
