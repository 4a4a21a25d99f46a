"""Workout analysis models: pipeline records and the model response contract.

Python attributes are snake_case; JSON keys are camelCase so the wire shape
matches what API consumers already expect (``videoUrl``, ``muscleGroups``).
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, WithJsonSchema
from pydantic.alias_generators import to_camel

DIFFICULTY_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")


class PlatformKind(str, Enum):
    """Social platform a video URL belongs to."""

    INSTAGRAM = "Instagram"
    TIKTOK = "TikTok"
    YOUTUBE = "YouTube"
    UNKNOWN = "Unknown"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoMetadata(_CamelModel):
    """Descriptive fields for a video. Every field has a non-empty default."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    title: str = Field(default="Workout Video", min_length=1)
    creator: str = Field(default="Fitness Creator", min_length=1)
    duration_hint: str = Field(default="~2 minutes", min_length=1)
    thumbnail_url: str = Field(
        default="https://via.placeholder.com/300x200?text=Workout+Video",
        min_length=1,
    )


class VideoInfo(_CamelModel):
    """One validated video URL plus synthesized metadata. Immutable."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    url: str
    platform: PlatformKind
    job_id: str
    metadata: VideoMetadata = Field(default_factory=VideoMetadata)


class WorkoutEntry(_CamelModel):
    """Shape each exercise entry is asked to take.

    Only used to build the structured-output schema. Parsed entries are kept
    as the model reported them (see ``WorkoutAnalysisResponse.workouts``).
    """

    name: str = Field(description="Exercise name exactly as written in the video")
    sets: str | None = Field(default=None, description="Number of sets, if shown")
    reps: str | None = Field(default=None, description="Number of reps, if shown")
    type: str = Field(description="Exercise category, e.g. strength or cardio")
    muscle_groups: list[str] = Field(description="Primary muscle first")
    duration_seconds: float = Field(ge=0, description="Estimated duration in seconds")
    difficulty: str = Field(
        description="One of: " + ", ".join(DIFFICULTY_LEVELS),
        json_schema_extra={"enum": list(DIFFICULTY_LEVELS)},
    )
    confidence: float = Field(ge=0, le=1, description="Confidence between 0 and 1")


# Entries must be JSON objects; their fields are not re-validated.
WorkoutEntries = Annotated[
    list[dict[str, Any]],
    WithJsonSchema({"type": "array", "items": WorkoutEntry.model_json_schema()}),
]


class WorkoutAnalysisResponse(_CamelModel):
    """Shape the model is asked to return (structured-output schema)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    workouts: WorkoutEntries = Field(default_factory=list)
    video_title: str | None = Field(default=None, description="Estimated video title")
    total_duration: float | str | None = Field(default=None, description="Total workout duration in seconds")


class AnalysisResult(_CamelModel):
    """Final analysis returned to the caller.

    ``video_url``, ``platform``, ``thumbnail_url`` and ``creator`` always come
    from the pipeline's VideoInfo, never from the model. ``workouts`` holds
    the model's entries unchanged.
    """

    workouts: list[dict[str, Any]] = Field(default_factory=list)
    video_url: str
    video_title: str
    thumbnail_url: str
    platform: PlatformKind
    creator: str

    def to_wire(self) -> dict:
        """Serialise with camelCase keys, JSON-safe values."""
        return self.model_dump(mode="json", by_alias=True)
