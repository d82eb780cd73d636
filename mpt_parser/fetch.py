from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Optional, Protocol
from urllib.parse import urlencode

from playwright.sync_api import APIRequestContext, Playwright, sync_playwright

from .config import Settings
from .errors import FetchError
from .navigator import Document, load_document
from .utils import session_cookie


class PageKey(str, Enum):
    SCHEDULE = "/studentu/raspisanie-zanyatiy/"
    REPLACEMENTS = "/studentu/izmeneniya-v-raspisanii/"
    DAY_REPLACEMENTS = "/rasp-management/print-replaces.php"
    SPECIALTIES = "/sites-otdels/"
    SPECIALTY_SITE = "specialty-site"
    TEACHERS = "teachers"


class Fetcher(Protocol):
    def fetch(self, key: PageKey, params: Optional[dict] = None) -> Document:
        ...


def build_url(settings: Settings, key: PageKey, params: Optional[dict] = None) -> str:
    params = params or {}
    if key is PageKey.SPECIALTY_SITE:
        if not params.get("url"):
            raise ValueError("SPECIALTY_SITE requires a 'url' parameter")
        return params["url"]
    if key is PageKey.TEACHERS:
        return settings.teachers_url
    url = settings.host + key.value
    if key is PageKey.DAY_REPLACEMENTS:
        day = params.get("date")
        if day is None:
            raise ValueError("DAY_REPLACEMENTS requires a 'date' parameter")
        if isinstance(day, date):
            day = day.isoformat()
        url += "?" + urlencode({"date": day})
    return url


class PageFetcher:
    """Fetches pages through Playwright's request API, no browser needed."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._playwright: Optional[Playwright] = None
        self._request: Optional[APIRequestContext] = None

    def start(self) -> "PageFetcher":
        self._playwright = sync_playwright().start()
        self._request = self._playwright.request.new_context(
            user_agent=self.settings.user_agent,
            timeout=self.settings.timeout_ms,
        )
        return self

    def close(self) -> None:
        if self._request is not None:
            self._request.dispose()
            self._request = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

    def __enter__(self) -> "PageFetcher":
        return self.start()

    def __exit__(self, *exc) -> None:
        self.close()

    def fetch(self, key: PageKey, params: Optional[dict] = None) -> Document:
        if self._request is None:
            raise RuntimeError("PageFetcher is not started")
        url = build_url(self.settings, key, params)
        logging.info("Fetching %s", url)
        # fresh session id per request, the site throttles by PHPSESSID
        response = self._request.get(url, headers={"Cookie": session_cookie()})
        if not response.ok:
            raise FetchError(url, response.status)
        return load_document(response.text())
