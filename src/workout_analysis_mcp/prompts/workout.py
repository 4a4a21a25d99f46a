"""Workout analysis prompt templates.

1. WORKOUT_SYSTEM_PROMPT — fixes the JSON output contract and the
   text-first extraction order.
2. WORKOUT_USER_TEMPLATE — per-video request.
   Variables: {url}, {platform}, {title}, {creator}, {duration}.

Metadata is interpolated verbatim. It is synthesized today; once it comes
from real extraction it is attacker-controlled text and needs injection
hardening.
"""

from __future__ import annotations

from typing import NamedTuple

from ..models.workout import DIFFICULTY_LEVELS, VideoInfo

WORKOUT_SYSTEM_PROMPT = """\
You are a fitness expert analyzing workout videos from social media.

### YOUR PRIMARY GOAL IS TEXT EXTRACTION ###

Treat any text visible in the video as ground truth. Do NOT guess at what \
might be happening when the text already says it.

Fitness videos on these platforms usually display:
- Exercise names as text (e.g. "Incline Smith", "Chest Press", "Pec Deck")
- Sets/reps information (e.g. "3 x 12", "4 sets 10 reps")
- Rest periods (e.g. "60s rest")

ASSUMPTIONS TO MAKE:
1. Text that looks like an exercise name IS an exercise being performed.
2. Gym equipment named in the text (e.g. "Smith Machine") is part of the exercise name.
3. The text names the EXACT exercise — do not generalize or substitute similar exercises.

PROCESS IN THIS ORDER:
1. Identify ALL visible text first.
2. Extract exercise names EXACTLY as written — keep capitalization and terminology.
3. Extract sets, reps and rest times EXACTLY as written.
4. Only after all text is extracted, infer exercise type and muscle groups.

FOR EACH EXERCISE PROVIDE:
1. name: exactly as written (e.g. "Incline Smith", not "Incline Bench Press")
2. sets and reps: the numbers shown, if any
3. type: the exercise category (strength, cardio, mobility, ...)
4. muscleGroups: primary muscle first
5. durationSeconds: estimated duration in seconds
6. difficulty: one of {difficulties}
7. confidence: a number between 0 and 1

When no video content is available, make educated assumptions from the URL \
and metadata provided.

Respond with a single JSON object and nothing else:
{{
  "workouts": [
    {{
      "name": "Exercise name (EXACTLY as written in the video if visible)",
      "sets": "Number of sets (if shown in video)",
      "reps": "Number of reps (if shown in video)",
      "type": "Exercise type",
      "muscleGroups": ["Primary muscle", "Secondary muscle"],
      "durationSeconds": 30,
      "difficulty": "{difficulty_example}",
      "confidence": 0.85
    }}
  ],
  "videoTitle": "Estimated video title",
  "totalDuration": 120
}}""".format(
    difficulties=", ".join(DIFFICULTY_LEVELS),
    difficulty_example="|".join(DIFFICULTY_LEVELS),
)

WORKOUT_USER_TEMPLATE = """\
Analyze this workout video:
URL: {url}
Platform: {platform}
Title: {title}
Creator: {creator}
Duration: {duration}

Based on this information, identify the likely exercises, targeted muscle \
groups, and other workout details."""


class PromptPayload(NamedTuple):
    """System directive + user request for one completion call."""

    system: str
    user: str


def build_prompt(info: VideoInfo) -> PromptPayload:
    """Render the prompt pair for *info*. Pure; no I/O."""
    user = WORKOUT_USER_TEMPLATE.format(
        url=info.url,
        platform=info.platform.value,
        title=info.metadata.title,
        creator=info.metadata.creator,
        duration=info.metadata.duration_hint,
    )
    return PromptPayload(system=WORKOUT_SYSTEM_PROMPT, user=user)
