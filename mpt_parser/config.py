from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()

DEFAULT_HOST = "https://mpt.ru"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


@dataclass
class Settings:
    host: str = DEFAULT_HOST
    teachers_url: str = DEFAULT_HOST + "/o-kolledzhe/prepodavateli/"
    timeout_ms: int = 30_000
    user_agent: str = DEFAULT_USER_AGENT
    timezone: ZoneInfo = ZoneInfo("Europe/Moscow")


def get_timezone() -> ZoneInfo:
    tz_name = os.getenv("TIMEZONE", "Europe/Moscow")
    try:
        return ZoneInfo(tz_name)
    except Exception:
        logging.warning("Invalid TIMEZONE %s, falling back to Europe/Moscow", tz_name)
        return ZoneInfo("Europe/Moscow")


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.warning("Invalid %s=%s, using %d", name, raw, default)
        return default


def get_settings() -> Settings:
    host = os.getenv("MPT_HOST", DEFAULT_HOST).rstrip("/")
    settings = Settings(
        host=host,
        teachers_url=os.getenv("MPT_TEACHERS_URL", host + "/o-kolledzhe/prepodavateli/"),
        timeout_ms=_get_int("MPT_TIMEOUT_MS", 30_000),
        user_agent=os.getenv("MPT_USER_AGENT", DEFAULT_USER_AGENT),
        timezone=get_timezone(),
    )
    if not settings.host.startswith(("http://", "https://")):
        logging.warning("MPT_HOST %s has no scheme", settings.host)
    return settings
