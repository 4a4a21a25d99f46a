"""Tests for the FastMCP server wiring."""

from __future__ import annotations

from unittest.mock import patch

from workout_analysis_mcp import server


def test_app_is_named():
    assert server.app.name == "workout-analysis"


async def test_lifespan_sets_up_and_flushes_tracing():
    with (
        patch.object(server.tracing, "setup") as mock_setup,
        patch.object(server.tracing, "shutdown") as mock_shutdown,
    ):
        async with server._lifespan(server.app):
            mock_setup.assert_called_once()
            mock_shutdown.assert_not_called()
        mock_shutdown.assert_called_once()


def test_main_configures_logging_then_runs():
    with (
        patch.object(server, "configure_logging") as mock_logging,
        patch.object(server.app, "run") as mock_run,
    ):
        server.main()
    mock_logging.assert_called_once()
    mock_run.assert_called_once()
