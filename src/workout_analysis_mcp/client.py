"""Gemini inference client for workout analysis.

The client is built from an explicit :class:`InferenceConfig` rather than a
process-wide singleton, so tests can hand in a fake SDK client.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google import genai
from google.genai import types
from pydantic import BaseModel, Field

from .config import DEFAULT_MODEL, ServerConfig
from .errors import ConfigurationError, InferenceError
from .models.workout import WorkoutAnalysisResponse
from .retry import RetryPolicy, with_retry

logger = logging.getLogger(__name__)


class InferenceConfig(BaseModel):
    """Everything one completion call needs."""

    api_key: str = Field(default="", repr=False)
    model: str = Field(default=DEFAULT_MODEL)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=1000, ge=1)
    thinking_budget: int | None = Field(default=0)
    timeout_seconds: float = Field(default=60.0, gt=0)
    retry: RetryPolicy = Field(default_factory=RetryPolicy)

    @classmethod
    def from_server_config(cls, cfg: ServerConfig) -> InferenceConfig:
        return cls(
            api_key=cfg.gemini_api_key,
            model=cfg.model,
            temperature=cfg.temperature,
            max_output_tokens=cfg.max_output_tokens,
            thinking_budget=cfg.thinking_budget,
            timeout_seconds=cfg.timeout_seconds,
            retry=RetryPolicy(
                max_attempts=cfg.retry_max_attempts,
                base_delay=cfg.retry_base_delay,
                max_delay=cfg.retry_max_delay,
            ),
        )


def _response_text(response: Any) -> str:
    """Join user-visible text parts, dropping thinking parts."""
    candidates = getattr(response, "candidates", None) or []
    content = getattr(candidates[0], "content", None) if candidates else None
    parts = getattr(content, "parts", None) or []
    text_parts = [p.text for p in parts if p.text and not getattr(p, "thought", False)]
    return "\n".join(text_parts) if text_parts else (response.text or "")


class InferenceClient:
    """Issues one structured-output completion per :meth:`complete` call."""

    def __init__(self, config: InferenceConfig, client: genai.Client | None = None) -> None:
        self.config = config
        self._client = client

    def _get_client(self) -> genai.Client:
        """Return the SDK client, creating it on first use."""
        if self._client is None:
            if not self.config.api_key:
                raise ConfigurationError(
                    "No Gemini API key — set GEMINI_API_KEY or pass api_key explicitly"
                )
            self._client = genai.Client(api_key=self.config.api_key)
            logger.info("Created Gemini client (key …%s)", self.config.api_key[-4:])
        return self._client

    def _generation_config(self, system: str) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(
            system_instruction=system,
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_output_tokens,
            response_mime_type="application/json",
            response_json_schema=WorkoutAnalysisResponse.model_json_schema(),
        )
        if self.config.thinking_budget is not None:
            config.thinking_config = types.ThinkingConfig(
                thinking_budget=self.config.thinking_budget,
            )
        return config

    async def complete(self, system: str, user: str) -> str:
        """Run the completion and return the raw JSON text.

        Raises:
            ConfigurationError: If no API key is configured.
            InferenceError: If the call fails, times out, or returns no text.
        """
        client = self._get_client()
        config = self._generation_config(system)
        timeout = self.config.timeout_seconds

        async def _attempt():
            return await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=self.config.model,
                    contents=user,
                    config=config,
                ),
                timeout=timeout,
            )

        try:
            response = await with_retry(_attempt, self.config.retry)
        except TimeoutError as exc:
            logger.error("Gemini call timed out after %.1fs", timeout)
            raise InferenceError(f"Gemini call timed out after {timeout:g}s") from exc
        except Exception as exc:
            logger.error("Gemini call failed: %s", exc)
            raise InferenceError(str(exc) or type(exc).__name__) from exc

        text = _response_text(response).strip()
        if not text:
            logger.error("Gemini returned an empty completion (model %s)", self.config.model)
            raise InferenceError("Gemini returned no content")
        return text

    async def aclose(self) -> None:
        """Release the underlying SDK client, if one was created."""
        if self._client is None:
            return
        try:
            await self._client.aio.aclose()
        except Exception:
            logger.debug("Async Gemini client close failed", exc_info=True)
        self._client = None
