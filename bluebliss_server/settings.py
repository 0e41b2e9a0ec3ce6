from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, find_dotenv

_LOADED = False


def ensure_env_loaded() -> None:
    global _LOADED
    if _LOADED:
        return
    here = Path(__file__).resolve()
    candidates = [
        here.parent / ".env",            # bluebliss_server/.env
        here.parent.parent / ".env",     # repo root .env
        Path.cwd() / ".env",             # CWD .env
        Path.home() / ".env",            # user global .env
    ]
    loaded = False
    for p in candidates:
        if p.exists():
            # Variables already in the OS env always win
            load_dotenv(dotenv_path=str(p), override=False)
            loaded = True
    if not loaded:
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)
    _LOADED = True


def env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    ensure_env_loaded()
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def env_float(name: str, default: float) -> float:
    raw = env_str(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_int(name: str, default: int) -> int:
    raw = env_str(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def environment() -> str:
    return env_str("BLUEBLISS_ENV", "development") or "development"


def log_file() -> str:
    return env_str("BLUEBLISS_LOG_FILE", "backend.log") or "backend.log"


def port() -> int:
    return env_int("PORT", 5001)
