"""Load config from EXPLORER_CONFIG_PATH or return default.

``load_config()`` is memoised with ``functools.lru_cache`` so the file is read
and parsed at most once per process.  Call ``load_config.cache_clear()`` to
force a re-read (useful in tests and when ``EXPLORER_CONFIG_PATH`` changes at
runtime).
"""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .schema import DEFAULT_CONFIG, ExplorerConfig

logger = logging.getLogger(__name__)


class _Env(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EXPLORER_", extra="ignore")
    config_path: Optional[str] = None
    root: Optional[str] = None


_env: Optional[_Env] = None


def _get_env() -> _Env:
    global _env
    if _env is None:
        _env = _Env()
    return _env


def served_root() -> str:
    """Sandbox root the HTTP API serves: ``EXPLORER_ROOT``, else the working directory."""
    root = _get_env().root
    return root if root and root.strip() else "."


@functools.lru_cache(maxsize=1)
def load_config() -> ExplorerConfig:
    """Load config from EXPLORER_CONFIG_PATH if set and present; else return DEFAULT_CONFIG.

    Result is cached for the lifetime of the process.  Call
    ``load_config.cache_clear()`` to force a reload.
    """
    path = _get_env().config_path
    if not path or not path.strip():
        return DEFAULT_CONFIG
    p = Path(path).expanduser().resolve()
    if not p.is_file():
        logger.warning("EXPLORER_CONFIG_PATH %s is not a file; using defaults", p)
        return DEFAULT_CONFIG
    data = json.loads(p.read_text(encoding="utf-8"))
    logger.debug("loaded explorer config from %s", p)
    return ExplorerConfig.model_validate(data)
