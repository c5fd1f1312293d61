"""
Runtime configuration and logging setup.

Values come from a project `.env` file (python-dotenv) or the process
environment. Anything missing or unparseable falls back to the defaults below.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
DEFAULT_FORECAST_HORIZON = 3
DEFAULT_OUTPUT_DIR = os.path.join("outputs", "reports")
DEFAULT_LOG_LEVEL = "INFO"
TIME_RANGE_ANCHORS = ("today", "latest")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class Settings:
    seed: int | None = None
    forecast_horizon: int = DEFAULT_FORECAST_HORIZON
    time_range_anchor: str = "today"
    output_dir: str = DEFAULT_OUTPUT_DIR
    log_level: str = DEFAULT_LOG_LEVEL


def _load_env_from_project(project_dir: str | Path | None) -> None:
    candidates = [Path(project_dir)] if project_dir else []
    candidates += [BASE_DIR, Path.cwd()]
    for d in candidates:
        env_file = d / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            return


def _int_env(name: str, default: int | None, minimum: int | None = None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if minimum is not None and value < minimum:
        logger.warning("Ignoring %s=%r: must be >= %d", name, raw, minimum)
        return default
    return value


def load_settings(env_dir: str | Path | None = None) -> Settings:
    """Read settings from `.env` / environment variables."""
    _load_env_from_project(env_dir)

    anchor = (os.getenv("TIME_RANGE_ANCHOR") or "today").strip().lower()
    if anchor not in TIME_RANGE_ANCHORS:
        logger.warning("Ignoring TIME_RANGE_ANCHOR=%r: expected one of %s", anchor, TIME_RANGE_ANCHORS)
        anchor = "today"

    level = (os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring LOG_LEVEL=%r: unknown level", level)
        level = DEFAULT_LOG_LEVEL

    return Settings(
        seed=_int_env("SALES_DATA_SEED", None, minimum=0),
        forecast_horizon=_int_env("FORECAST_HORIZON", DEFAULT_FORECAST_HORIZON, minimum=0),
        time_range_anchor=anchor,
        output_dir=(os.getenv("REPORT_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR).strip(),
        log_level=level,
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.basicConfig(handlers=[handler], level=level, force=True)
