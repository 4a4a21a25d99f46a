"""Server configuration via environment variables."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator

from .dotenv import is_placeholder, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Every variable ServerConfig.from_env reads; also the keys taken from .env.
ENV_VARS: tuple[str, ...] = (
    "GEMINI_API_KEY",
    "WORKOUT_MODEL",
    "WORKOUT_TEMPERATURE",
    "WORKOUT_MAX_OUTPUT_TOKENS",
    "WORKOUT_THINKING_BUDGET",
    "WORKOUT_TIMEOUT_SECONDS",
    "WORKOUT_RETRY_MAX_ATTEMPTS",
    "WORKOUT_RETRY_BASE_DELAY",
    "WORKOUT_RETRY_MAX_DELAY",
    "WORKOUT_LOG_LEVEL",
    "WORKOUT_TRACING_ENABLED",
    "MLFLOW_TRACKING_URI",
    "MLFLOW_EXPERIMENT_NAME",
)


def _env(name: str, default: str = "") -> str:
    """Read an env var, treating blanks and unresolved placeholders as unset."""
    value = os.getenv(name, "").strip()
    if not value or is_placeholder(value):
        return default
    return value


def _resolve_tracing_enabled(flag_value: str, tracking_uri: str) -> bool:
    """Derive tracing_enabled from env vars.

    - ``WORKOUT_TRACING_ENABLED=false`` → always disabled (explicit opt-out).
    - Otherwise enabled only when ``MLFLOW_TRACKING_URI`` is set.
    """
    if flag_value.lower() == "false":
        return False
    return bool(tracking_uri)


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    gemini_api_key: str = Field(default="")
    model: str = Field(default=DEFAULT_MODEL)
    temperature: float = Field(default=0.7)
    max_output_tokens: int = Field(default=1000)
    thinking_budget: int = Field(default=0)
    timeout_seconds: float = Field(default=60.0)
    retry_max_attempts: int = Field(default=1)
    retry_base_delay: float = Field(default=1.0)
    retry_max_delay: float = Field(default=30.0)
    log_level: str = Field(default="INFO")
    tracing_enabled: bool = Field(default=False)
    mlflow_tracking_uri: str = Field(default="")
    mlflow_experiment_name: str = Field(default="workout-analysis-mcp")

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError("temperature must be between 0.0 and 2.0")
        return value

    @field_validator("max_output_tokens", "retry_max_attempts")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Configuration values must be >= 1")
        return value

    @field_validator("thinking_budget")
    @classmethod
    def validate_thinking_budget(cls, value: int) -> int:
        if value < -1:
            raise ValueError("thinking_budget must be >= -1 (-1 = dynamic)")
        return value

    @field_validator("timeout_seconds", "retry_base_delay", "retry_max_delay")
    @classmethod
    def validate_positive_floats(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Timeouts and delays must be > 0")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in VALID_LOG_LEVELS:
            allowed = ", ".join(sorted(VALID_LOG_LEVELS))
            raise ValueError(f"Invalid log level '{value}'. Allowed: {allowed}")
        return level

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        return cls(
            gemini_api_key=_env("GEMINI_API_KEY"),
            model=_env("WORKOUT_MODEL", DEFAULT_MODEL),
            temperature=float(_env("WORKOUT_TEMPERATURE", "0.7")),
            max_output_tokens=int(_env("WORKOUT_MAX_OUTPUT_TOKENS", "1000")),
            thinking_budget=int(_env("WORKOUT_THINKING_BUDGET", "0")),
            timeout_seconds=float(_env("WORKOUT_TIMEOUT_SECONDS", "60")),
            retry_max_attempts=int(_env("WORKOUT_RETRY_MAX_ATTEMPTS", "1")),
            retry_base_delay=float(_env("WORKOUT_RETRY_BASE_DELAY", "1.0")),
            retry_max_delay=float(_env("WORKOUT_RETRY_MAX_DELAY", "30.0")),
            log_level=_env("WORKOUT_LOG_LEVEL", "INFO"),
            tracing_enabled=_resolve_tracing_enabled(
                _env("WORKOUT_TRACING_ENABLED"),
                _env("MLFLOW_TRACKING_URI"),
            ),
            mlflow_tracking_uri=_env("MLFLOW_TRACKING_URI"),
            mlflow_experiment_name=_env("MLFLOW_EXPERIMENT_NAME", "workout-analysis-mcp"),
        )


_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access.

    Loads ``~/.config/workout-analysis-mcp/.env`` before reading env vars.
    Process environment always takes precedence over the config file.
    """
    global _config
    if _config is None:
        injected = load_dotenv(ENV_VARS)
        if injected:
            logger.info(
                "Loaded %d var(s) from config: %s",
                len(injected),
                ", ".join(injected.keys()),
            )
        _config = ServerConfig.from_env()
    return _config
