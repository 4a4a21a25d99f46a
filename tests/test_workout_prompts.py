"""Tests for workout analysis prompt construction."""

from __future__ import annotations

import json
import re

from workout_analysis_mcp.metadata import synthesize
from workout_analysis_mcp.models.workout import PlatformKind, VideoInfo, VideoMetadata, WorkoutEntry
from workout_analysis_mcp.prompts.workout import (
    WORKOUT_SYSTEM_PROMPT,
    WORKOUT_USER_TEMPLATE,
    PromptPayload,
    build_prompt,
)


class TestSystemPrompt:
    def test_describes_output_contract_keys(self):
        for key in ('"workouts"', '"videoTitle"', '"totalDuration"', '"muscleGroups"', '"durationSeconds"'):
            assert key in WORKOUT_SYSTEM_PROMPT

    def test_example_object_is_valid_json(self):
        """The JSON example embedded in the prompt parses as an object."""
        start = WORKOUT_SYSTEM_PROMPT.index("{")
        example = json.loads(WORKOUT_SYSTEM_PROMPT[start:])
        assert set(example) == {"workouts", "videoTitle", "totalDuration"}
        assert example["workouts"][0]["difficulty"] == "beginner|intermediate|advanced"

    def test_example_entry_keys_match_schema(self):
        start = WORKOUT_SYSTEM_PROMPT.index("{")
        entry = json.loads(WORKOUT_SYSTEM_PROMPT[start:])["workouts"][0]
        assert set(entry) == set(WorkoutEntry.model_json_schema()["properties"])

    def test_text_extraction_comes_before_inference(self):
        text_first = WORKOUT_SYSTEM_PROMPT.index("Identify ALL visible text first")
        infer_later = WORKOUT_SYSTEM_PROMPT.index("infer exercise type and muscle groups")
        assert text_first < infer_later

    def test_no_unformatted_placeholders(self):
        assert re.search(r"\{[a-z_]+\}", WORKOUT_SYSTEM_PROMPT) is None


class TestUserTemplate:
    def test_formats_all_variables(self):
        result = WORKOUT_USER_TEMPLATE.format(
            url="https://youtu.be/x",
            platform="YouTube",
            title="Push Day",
            creator="Coach",
            duration="~5 minutes",
        )
        assert "URL: https://youtu.be/x" in result
        assert "Platform: YouTube" in result
        assert "Title: Push Day" in result
        assert "Creator: Coach" in result
        assert "Duration: ~5 minutes" in result


class TestBuildPrompt:
    def test_returns_payload_with_fixed_system(self):
        info = synthesize("https://youtu.be/dQw4w9WgXcQ", PlatformKind.YOUTUBE)
        payload = build_prompt(info)
        assert isinstance(payload, PromptPayload)
        assert payload.system == WORKOUT_SYSTEM_PROMPT

    def test_user_prompt_interpolates_fields_verbatim(self):
        info = VideoInfo(
            url="https://www.instagram.com/reel/ABC123/",
            platform=PlatformKind.INSTAGRAM,
            job_id="job-1",
            metadata=VideoMetadata(
                title='Leg Day {"quoted"}',
                creator="@coach_k",
                duration_hint="45s",
                thumbnail_url="https://img.example/t.jpg",
            ),
        )
        user = build_prompt(info).user
        assert "URL: https://www.instagram.com/reel/ABC123/" in user
        assert "Platform: Instagram" in user
        assert 'Title: Leg Day {"quoted"}' in user
        assert "Creator: @coach_k" in user
        assert "Duration: 45s" in user

    def test_deterministic_for_same_input(self):
        info = synthesize("https://youtu.be/dQw4w9WgXcQ", PlatformKind.YOUTUBE)
        assert build_prompt(info) == build_prompt(info)

    def test_job_id_does_not_leak_into_prompt(self):
        info = synthesize("https://youtu.be/dQw4w9WgXcQ", PlatformKind.YOUTUBE)
        payload = build_prompt(info)
        assert info.job_id not in payload.user
