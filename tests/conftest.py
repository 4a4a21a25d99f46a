"""Shared test fixtures for workout-analysis-mcp."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from workout_analysis_mcp.client import InferenceClient, InferenceConfig
from workout_analysis_mcp.metadata import synthesize
from workout_analysis_mcp.models.workout import PlatformKind, VideoInfo


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


def make_response(text: str | None) -> types.GenerateContentResponse:
    """Build a GenerateContentResponse whose single candidate carries *text*."""
    if text is None:
        return types.GenerateContentResponse(candidates=[])
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=text)]),
            )
        ]
    )


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure tests never hit real Gemini API."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key-not-real")


@pytest.fixture(autouse=True)
def _disable_tracing(monkeypatch):
    """Disable MLflow tracing in all tests to avoid real tracking-server calls."""
    monkeypatch.setenv("WORKOUT_TRACING_ENABLED", "false")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Prevent tests from loading the user's real ~/.config/workout-analysis-mcp/.env."""
    monkeypatch.setattr(
        "workout_analysis_mcp.dotenv.DEFAULT_ENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton between tests."""
    import workout_analysis_mcp.config as cfg_mod

    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture()
def video_info() -> VideoInfo:
    return synthesize("https://youtu.be/dQw4w9WgXcQ", PlatformKind.YOUTUBE)


@pytest.fixture()
def mock_genai_client():
    """A stand-in google-genai client with an async generate_content."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=make_response(json.dumps({"workouts": [], "videoTitle": "Leg Day"})),
    )
    client.aio.aclose = AsyncMock()
    return client


@pytest.fixture()
def inference_client(mock_genai_client) -> InferenceClient:
    """InferenceClient wired to ``mock_genai_client`` with default policy."""
    return InferenceClient(InferenceConfig(api_key="test-key"), client=mock_genai_client)
