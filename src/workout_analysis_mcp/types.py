"""Shared type aliases for tool parameters."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

WorkoutVideoUrl = Annotated[str, Field(
    description=(
        "Workout video URL: Instagram post/reel/tv, "
        "TikTok @handle/video/<id>, or YouTube watch?v= / youtu.be link"
    ),
)]
