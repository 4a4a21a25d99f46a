"""Optional MLflow tracing for workout analyses.

One ``workout_analyze`` call produces this trace when tracing is on::

    workout_analyze   (TOOL, from @trace)
    ├── inference     (CHAIN, from span(); platform, job_id, content_id)
    │   └── generate_content  (CHAT_MODEL, from mlflow.gemini.autolog)
    └── contract      (PARSER, from span(); job_id, workout_count)

Everything here is a no-op when ``mlflow-tracing`` is not installed, when
``MLFLOW_TRACKING_URI`` is empty, or when ``WORKOUT_TRACING_ENABLED=false``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)

try:
    import mlflow
    import mlflow.gemini

    _HAS_MLFLOW = True
except ImportError:
    _HAS_MLFLOW = False


def is_enabled() -> bool:
    """True when mlflow-tracing is importable and the config turns tracing on."""
    if not _HAS_MLFLOW:
        return False
    from .config import get_config

    return get_config().tracing_enabled


def trace(
    func: Callable | None = None,
    *,
    name: str | None = None,
    span_type: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Callable:
    """Wrap an MCP tool in a root span; returns *func* unchanged when off.

    Decided once, at decoration time.
    """
    if not is_enabled():
        return func if func is not None else (lambda f: f)
    return mlflow.trace(func, name=name, span_type=span_type, attributes=attributes)


@contextmanager
def span(name: str, *, span_type: str = "CHAIN", **attributes: Any) -> Iterator[Any]:
    """Open a child span for one pipeline stage.

    Yields the live MLflow span, or ``None`` when tracing is off, so callers
    can add attributes once the stage has a result::

        with span("contract", span_type="PARSER", job_id=info.job_id) as live:
            result = parse(raw, info)
            if live is not None:
                live.set_attribute("workout_count", len(result.workouts))
    """
    if not is_enabled():
        yield None
        return
    with mlflow.start_span(name=name, span_type=span_type, attributes=attributes) as live:
        yield live


def setup() -> None:
    """Point MLflow at the configured tracking server and autolog Gemini calls.

    A failure is logged and the server starts without tracing.
    """
    if not is_enabled():
        return

    from .config import get_config

    cfg = get_config()
    try:
        mlflow.set_tracking_uri(cfg.mlflow_tracking_uri)
        mlflow.set_experiment(cfg.mlflow_experiment_name)
        mlflow.gemini.autolog()
    except Exception:
        logger.warning("MLflow tracing setup failed, continuing without it", exc_info=True)
        return
    logger.info(
        "MLflow tracing on (uri=%s, experiment=%s)",
        cfg.mlflow_tracking_uri, cfg.mlflow_experiment_name,
    )


def shutdown() -> None:
    """Flush traces still queued for async export."""
    if not is_enabled():
        return

    try:
        mlflow.flush_trace_async_logging()
    except Exception:
        logger.warning("MLflow trace flush failed", exc_info=True)
