"""
util/config.py

Runtime configuration read from the environment (a local .env file is loaded first).

Environment variables:
- API_BASE_URL        weather provider base URL (default: empty, every call fails)
- API_KEY             weather provider key, sent as `appid` (default: empty)
- HISTORY_PATH        JSON file backing the search history (default: data/searchHistory.json)
- HISTORY_DUPLICATES  reject | skip | allow (default: reject)
- HTTP_TIMEOUT        outbound timeout in seconds (default: unset, transport default)
- LOG_LEVEL           DEBUG | INFO | WARNING | ERROR (default: INFO)
- HOST / PORT         bind address for `python api.py` (default: 0.0.0.0:3001)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


DEFAULT_HISTORY_PATH = os.path.join("data", "searchHistory.json")


def env_timeout():
    raw = os.getenv("HTTP_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _env_port():
    try:
        return int(os.getenv("PORT", "3001"))
    except ValueError:
        return 3001


@dataclass(frozen=True)
class Settings:
    api_base_url: str = ""
    api_key: str = ""
    history_path: str = DEFAULT_HISTORY_PATH
    duplicate_policy: str = "reject"
    http_timeout: float | None = None
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            api_base_url=os.getenv("API_BASE_URL", "").rstrip("/"),
            api_key=os.getenv("API_KEY", ""),
            history_path=os.getenv("HISTORY_PATH", DEFAULT_HISTORY_PATH),
            duplicate_policy=os.getenv("HISTORY_DUPLICATES", "reject").strip().lower(),
            http_timeout=env_timeout(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_port(),
        )
