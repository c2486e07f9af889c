# src/maelnode/env.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

_LOADED = False

DEFAULT_HANDLERS: Tuple[str, ...] = ("echo", "generate", "generate_id")


def load_dotenv_if_present(dotenv_path: Optional[str] = None) -> bool:
    """
    Best-effort .env loader.

    - Deterministic: loads once per process.
    - Never overrides variables already set in the real environment.
    - Path rules:
        1) If dotenv_path arg provided, use it.
        2) Else if MAELNODE_DOTENV_PATH is set, use that.
        3) Else default to ".env" in current working directory.

    Returns True if a dotenv file was found AND loaded, else False.
    """
    global _LOADED
    if _LOADED:
        return False
    _LOADED = True

    path = Path(dotenv_path or os.getenv("MAELNODE_DOTENV_PATH", ".env")).expanduser()
    if not path.is_file():
        return False

    load_dotenv(dotenv_path=str(path), override=False)
    return True


def _env_str(name: str, default: str = "") -> str:
    v = os.environ.get(name)
    return str(default if v is None else v).strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = str(os.environ.get(name, "")).strip().lower()
    if not raw:
        return bool(default)
    if raw in {"1", "true", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "no", "n", "off"}:
        return False
    return bool(default)


def split_names(raw: str) -> Tuple[str, ...]:
    return tuple(p.strip().lower() for p in raw.split(",") if p.strip())


@dataclass(frozen=True, slots=True)
class NodeConfig:
    log_level: str = "INFO"
    handlers: Tuple[str, ...] = DEFAULT_HANDLERS
    metrics_enabled: bool = False


def node_config_from_env() -> NodeConfig:
    handlers_raw = _env_str("MAELNODE_HANDLERS", "")
    return NodeConfig(
        log_level=(_env_str("MAELNODE_LOG_LEVEL", "INFO").upper() or "INFO"),
        handlers=split_names(handlers_raw) if handlers_raw else DEFAULT_HANDLERS,
        metrics_enabled=_env_bool("MAELNODE_METRICS_ENABLED", False),
    )
