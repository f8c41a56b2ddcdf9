"""
Process-level configuration: ``.env`` loading, telemetry location and
logging. Nothing here runs at import time; entry points call
``init_runtime()``.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "SALES_INTEL_"
ROOT_MARKERS = ("pyproject.toml", ".git")
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(ENV_PREFIX + name, default)


def env_flag(name: str) -> bool:
    return (env(name) or "").strip().lower() in _TRUTHY


def _marked_ancestor(start: Path) -> Optional[Path]:
    return next(
        (p for p in (start, *start.parents) if any((p / m).exists() for m in ROOT_MARKERS)),
        None,
    )


@lru_cache(maxsize=1)
def project_root() -> Path:
    """SALES_INTEL_REPO_ROOT, else the nearest marked ancestor of the cwd or of this package."""
    override = env("REPO_ROOT")
    if override:
        path = Path(override).expanduser().resolve()
        if not path.is_dir():
            raise RuntimeError(f"{ENV_PREFIX}REPO_ROOT is not a directory: {path}")
        return path

    for start in (Path.cwd().resolve(), Path(__file__).resolve().parent):
        found = _marked_ancestor(start)
        if found:
            return found
    return Path.cwd().resolve()


@lru_cache(maxsize=1)
def load_env_once() -> Optional[Path]:
    """
    Load the first existing of SALES_INTEL_ENV_FILE and ``<root>/.env``.

    Variables already present in the environment win over the file.
    """
    explicit = env("ENV_FILE")
    candidates = [Path(explicit).expanduser()] if explicit else []
    candidates.append(project_root() / ".env")

    for candidate in candidates:
        if candidate.is_file():
            path = candidate.resolve()
            load_dotenv(dotenv_path=path, override=False)
            return path
    return None


def telemetry_dir() -> Path:
    override = env("TELEMETRY_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return (project_root() / "artifacts" / "telemetry").resolve()


def telemetry_disabled() -> bool:
    return env_flag("DISABLE_TELEMETRY")


@dataclass(frozen=True)
class LogSettings:
    level: int = logging.INFO
    fmt: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls) -> "LogSettings":
        level_name = (env("LOG_LEVEL") or "INFO").upper()
        return cls(
            level=getattr(logging, level_name, logging.INFO),
            fmt=env("LOG_FORMAT") or DEFAULT_LOG_FORMAT,
        )


def configure_logging(log_settings: Optional[LogSettings] = None) -> None:
    """
    Send logs to stderr (stdout carries the stdio transport).
    Leaves an already-configured root logger alone.
    """
    if logging.getLogger().handlers:
        return
    s = log_settings or LogSettings.from_env()
    logging.basicConfig(level=s.level, format=s.fmt, stream=sys.stderr)


def init_runtime(*, configure_logs: bool = True, load_env: bool = True) -> None:
    """Entry points only: load ``.env`` then configure logging."""
    if load_env:
        load_env_once()
    if configure_logs:
        configure_logging()
