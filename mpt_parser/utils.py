from __future__ import annotations

import secrets
import string
from datetime import date, datetime, time, timedelta
from typing import Iterator, Union

_BASE36 = string.digits + string.ascii_lowercase


def midnight(day: Union[date, datetime]) -> datetime:
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.min)


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)


def absolute_url(host: str, href: str) -> str:
    """Resolve a site-relative href against ``host``; empty stays empty."""
    href = (href or "").strip()
    if not href:
        return ""
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("//"):
        return "https:" + href
    return host.rstrip("/") + "/" + href.lstrip("/")


def session_cookie() -> str:
    token = "".join(secrets.choice(_BASE36) for _ in range(11))
    return f"PHPSESSID=MPT_Parser#{token};"
