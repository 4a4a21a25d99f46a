"""Per-user ``.env`` file for the workout analysis server.

An MCP host launches the server with whatever environment it has, which often
lacks GEMINI_API_KEY. ``~/.config/workout-analysis-mcp/.env`` fills the gaps:
only the keys the server reads are taken from it, and a value already present
in the process environment is never replaced.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ENV_PATH = Path.home() / ".config" / "workout-analysis-mcp" / ".env"


def is_placeholder(value: str) -> bool:
    """True for an unresolved shell reference such as ``$KEY`` or ``${KEY:-x}``.

    Some MCP hosts pass these through verbatim instead of expanding them.
    """
    if value.startswith("${") and value.endswith("}"):
        inner = value[2:-1].split(":-", 1)[0].strip()
    elif value.startswith("$"):
        inner = value[1:].strip()
    else:
        return False
    return bool(inner) and all(ch.isalnum() or ch == "_" for ch in inner)


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _parse_line(line: str) -> tuple[str, str] | None:
    """Split one ``[export ]KEY=VALUE`` line, or return None if it is not one."""
    key, sep, value = line.removeprefix("export ").partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, _unquote(value)


def parse_dotenv(path: Path) -> dict[str, str]:
    """Read *path* into a dict; a missing file yields ``{}``.

    Blank lines and ``#`` comments are skipped. Other lines without ``=`` are
    logged and skipped. No variable expansion; the last assignment wins.
    """
    if not path.is_file():
        return {}

    result: dict[str, str] = {}
    for lineno, raw_line in enumerate(path.read_text().splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        parsed = _parse_line(line)
        if parsed is None:
            logger.warning("Skipping malformed line %d in %s", lineno, path)
            continue
        key, value = parsed
        result[key] = value
    return result


def _needs_value(current: str | None) -> bool:
    if current is None:
        return True
    current = _unquote(current)
    return not current or is_placeholder(current)


def load_dotenv(keys: Collection[str], path: Path | None = None) -> dict[str, str]:
    """Copy *keys* from the ``.env`` file into ``os.environ`` where unset.

    Args:
        keys: Environment variable names the caller reads. Anything else in
            the file is ignored.
        path: File to read. Defaults to :data:`DEFAULT_ENV_PATH`.

    Returns:
        The vars that were injected.
    """
    path = path or DEFAULT_ENV_PATH
    injected: dict[str, str] = {}
    for key, value in parse_dotenv(path).items():
        if key not in keys:
            logger.debug("Ignoring %s from %s (not a server setting)", key, path)
            continue
        if _needs_value(os.environ.get(key)):
            os.environ[key] = value
            injected[key] = value
    return injected
