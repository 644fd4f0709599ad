"""Runtime settings for mccmnc.

Defaults live as module constants.  :func:`load_settings` layers an optional
YAML file and ``MCCMNC_*`` environment variables on top of them::

    # mccmnc.yaml
    base_url: https://www.itu.int
    docs_path: /pub/T-SP-E.212B
    timeout: 60
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from mccmnc.errors import ConfigError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Source location
# ---------------------------------------------------------------------------
BASE_URL = "https://www.itu.int"
DOCS_PATH = "/pub/T-SP-E.212B"
DOCUMENT_EXTENSION = ".docx"

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
DOWNLOAD_TIMEOUT = 30
USER_AGENT = "mccmnc/0.1 (+https://www.itu.int/pub/T-SP-E.212B)"

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
DEFAULT_OUTPUT = "data.json"

# Environment variable -> settings field
_ENV_OVERRIDES: dict[str, str] = {
    "MCCMNC_BASE_URL": "base_url",
    "MCCMNC_DOCS_PATH": "docs_path",
    "MCCMNC_OUTPUT": "default_output",
    "MCCMNC_TIMEOUT": "timeout",
}


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    base_url: str = BASE_URL
    docs_path: str = DOCS_PATH
    document_extension: str = DOCUMENT_EXTENSION
    timeout: int = DOWNLOAD_TIMEOUT
    user_agent: str = USER_AGENT
    default_output: str = DEFAULT_OUTPUT

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("timeout")
    @classmethod
    def positive_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("timeout must be > 0")
        return v

    @property
    def index_url(self) -> str:
        return f"{self.base_url}{self.docs_path}"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return {str(key): value for key, value in data.items()}


def load_settings(
    path: str | Path | None = None,
    env: dict[str, str] | None = None,
) -> Settings:
    """Build :class:`Settings` from defaults, an optional YAML file and env vars.

    Args:
        path: Optional YAML file whose top-level keys are settings fields.
        env:  Environment mapping (defaults to ``os.environ``).

    Raises:
        ConfigError: If the file cannot be read or a value fails validation.
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_yaml(Path(path)))
        logger.debug("Loaded settings from %s", path)

    env = os.environ if env is None else env
    for var, field in _ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw:
            values[field] = raw
            logger.debug("Setting %s overridden by %s", field, var)

    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
