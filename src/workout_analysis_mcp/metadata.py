"""Placeholder video metadata for a validated URL.

No media is fetched: the record is built from the URL and platform alone,
so the same input always yields the same metadata. It stands in for a real
frame/metadata extraction step.
"""

from __future__ import annotations

import itertools
import logging
import time

from .models.workout import PlatformKind, VideoInfo, VideoMetadata

logger = logging.getLogger(__name__)

PLACEHOLDER_THUMBNAIL_URL = "https://via.placeholder.com/300x200?text=Workout+Video"
PLACEHOLDER_CREATOR = "Fitness Creator"
PLACEHOLDER_DURATION = "~2 minutes"

_sequence = itertools.count(1)


def new_job_id() -> str:
    """Return a token distinct from every other one issued by this process."""
    return f"{time.time_ns()}-{next(_sequence)}"


def placeholder_metadata(platform: PlatformKind) -> VideoMetadata:
    """Deterministic metadata tagged with the platform name."""
    return VideoMetadata(
        title=f"Workout Video ({platform.value})",
        creator=PLACEHOLDER_CREATOR,
        duration_hint=PLACEHOLDER_DURATION,
        thumbnail_url=PLACEHOLDER_THUMBNAIL_URL,
    )


def synthesize(url: str, platform: PlatformKind) -> VideoInfo:
    """Build the VideoInfo for *url*. Always succeeds, even for Unknown."""
    info = VideoInfo(
        url=url,
        platform=platform,
        job_id=new_job_id(),
        metadata=placeholder_metadata(platform),
    )
    logger.debug("Synthesized metadata for %s (job %s)", url, info.job_id)
    return info
