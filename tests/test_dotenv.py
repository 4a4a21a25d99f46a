"""Tests for the dotenv auto-loader."""

from __future__ import annotations

import logging
import os

import pytest

from workout_analysis_mcp.dotenv import is_placeholder, load_dotenv, parse_dotenv

KEYS = {"WORKOUT_TEST_VAR"}


class TestParseDotenv:
    """Unit tests for the .env file parser."""

    def test_basic_key_value(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("FOO=bar\n")
        assert parse_dotenv(env) == {"FOO": "bar"}

    def test_quoted_values(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("A=\"double\"\nB='single'\n")
        assert parse_dotenv(env) == {"A": "double", "B": "single"}

    def test_comments_blanks_and_export(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("# comment\n\nexport GEMINI_API_KEY=abc123\n")
        assert parse_dotenv(env) == {"GEMINI_API_KEY": "abc123"}

    def test_value_with_equals(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("URL=https://host?a=1&b=2\n")
        assert parse_dotenv(env) == {"URL": "https://host?a=1&b=2"}

    def test_last_assignment_wins(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("FOO=one\nFOO=two\n")
        assert parse_dotenv(env) == {"FOO": "two"}

    def test_malformed_line_is_skipped_and_logged(self, tmp_path, caplog):
        env = tmp_path / ".env"
        env.write_text("FOO=bar\nNO_EQUALS\n=orphan\n")

        with caplog.at_level(logging.WARNING, logger="workout_analysis_mcp.dotenv"):
            assert parse_dotenv(env) == {"FOO": "bar"}

        assert "line 2" in caplog.text
        assert "line 3" in caplog.text

    def test_missing_file(self, tmp_path):
        assert parse_dotenv(tmp_path / "nonexistent") == {}


class TestIsPlaceholder:
    @pytest.mark.parametrize("value", ["$GEMINI_API_KEY", "${GEMINI_API_KEY}", "${KEY:-fallback}"])
    def test_unresolved_references(self, value):
        assert is_placeholder(value) is True

    @pytest.mark.parametrize("value", ["abc123", "$", "${}", "pa$$word", "$not-a-name"])
    def test_real_values(self, value):
        assert is_placeholder(value) is False


class TestLoadDotenv:
    def test_injects_unset_vars(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORKOUT_TEST_VAR", "")
        env = tmp_path / ".env"
        env.write_text("WORKOUT_TEST_VAR=from-file\n")

        injected = load_dotenv(KEYS, env)

        assert injected == {"WORKOUT_TEST_VAR": "from-file"}
        assert os.environ["WORKOUT_TEST_VAR"] == "from-file"

    def test_process_env_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORKOUT_TEST_VAR", "from-process")
        env = tmp_path / ".env"
        env.write_text("WORKOUT_TEST_VAR=from-file\n")

        assert load_dotenv(KEYS, env) == {}
        assert os.environ["WORKOUT_TEST_VAR"] == "from-process"

    def test_placeholder_is_overridden(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORKOUT_TEST_VAR", "${WORKOUT_TEST_VAR}")
        env = tmp_path / ".env"
        env.write_text("WORKOUT_TEST_VAR=from-file\n")

        assert load_dotenv(KEYS, env) == {"WORKOUT_TEST_VAR": "from-file"}

    def test_keys_outside_the_list_are_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORKOUT_TEST_VAR", "")
        monkeypatch.setenv("UNRELATED_TOOL_TOKEN", "")
        env = tmp_path / ".env"
        env.write_text("WORKOUT_TEST_VAR=from-file\nUNRELATED_TOOL_TOKEN=secret\n")

        assert load_dotenv(KEYS, env) == {"WORKOUT_TEST_VAR": "from-file"}
        assert os.environ["UNRELATED_TOOL_TOKEN"] == ""

    def test_defaults_to_user_config_path(self, tmp_path, monkeypatch):
        env = tmp_path / "user.env"
        env.write_text("WORKOUT_TEST_VAR=from-default\n")
        monkeypatch.setattr("workout_analysis_mcp.dotenv.DEFAULT_ENV_PATH", env)
        monkeypatch.setenv("WORKOUT_TEST_VAR", "")

        assert load_dotenv(KEYS) == {"WORKOUT_TEST_VAR": "from-default"}
