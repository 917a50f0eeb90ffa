from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def repo_root() -> Path:
    # Project root is the directory that contains the `crust/` package.
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    # Prefer a project-local `.env`; fall back to searching from CWD.
    root_env = repo_root() / ".env"
    env_path = str(root_env) if root_env.exists() else (find_dotenv(usecwd=True) or str(root_env))
    load_dotenv(env_path)


class CrustSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    debug: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_settings() -> CrustSettings:
    load_env()
    raw: dict[str, str] = {}
    if os.getenv("CRUST_DEBUG"):
        raw["debug"] = os.environ["CRUST_DEBUG"].strip()
    if os.getenv("CRUST_LOG_LEVEL"):
        raw["log_level"] = os.environ["CRUST_LOG_LEVEL"]
    return CrustSettings.model_validate(raw)


def configure_logging(level: str) -> None:
    """Send `crust.*` log records to stderr at `level`."""
    crust_logger = logging.getLogger("crust")
    crust_logger.setLevel(level)
    crust_logger.propagate = False
    for h in list(crust_logger.handlers):
        crust_logger.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    crust_logger.addHandler(handler)
