"""Main FastMCP server — mounts all sub-servers."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import tracing
from .config import get_config
from .tools.infra import infra_server
from .tools.workout import workout_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook: tracing setup and flush."""
    tracing.setup()
    logger.info("Workout analysis server started (model %s)", get_config().model)
    yield {}
    tracing.shutdown()


app = FastMCP(
    "workout-analysis",
    instructions=(
        "Workout video analysis. Give an Instagram, TikTok, or YouTube workout "
        "video URL and get back the exercises, sets/reps, muscle groups and "
        "duration estimates."
    ),
    lifespan=_lifespan,
)

app.mount(workout_server)
app.mount(infra_server)


def configure_logging() -> None:
    """Send logs to stderr at the configured level (stdout carries MCP traffic)."""
    logging.basicConfig(
        level=get_config().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry-point for ``workout-analysis-mcp`` console script."""
    configure_logging()
    app.run()


if __name__ == "__main__":
    main()
