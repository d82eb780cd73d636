from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Tuple
from urllib.parse import urlsplit

from .config import Settings, get_settings
from .fetch import Fetcher, PageKey
from .models import (
    ReplacementDay,
    ReplacementGroup,
    Specialty,
    SpecialtyDirectoryEntry,
    SpecialtySite,
    Teacher,
    Week,
)
from .replacements import iter_replacements, parse_day_replacements, parse_replacements
from .schedule import parse_current_week, parse_schedule
from .specialties import find_specialty, parse_specialties, parse_specialty_site
from .teachers import parse_teachers


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


class MptClient:
    def __init__(self, fetcher: Fetcher, settings: Optional[Settings] = None):
        self.fetcher = fetcher
        self.settings = settings or get_settings()

    def today(self) -> date:
        return datetime.now(self.settings.timezone).date()

    def get_current_week(self) -> Week:
        return parse_current_week(self.fetcher.fetch(PageKey.SCHEDULE))

    def get_schedule(self) -> Tuple[Specialty, ...]:
        specialties = parse_schedule(self.fetcher.fetch(PageKey.SCHEDULE))
        logging.info("Parsed schedule for %d specialties", len(specialties))
        return specialties

    def get_replacements(self) -> Tuple[ReplacementDay, ...]:
        days = parse_replacements(self.fetcher.fetch(PageKey.REPLACEMENTS))
        logging.info("Parsed replacements for %d days", len(days))
        return days

    def get_replacements_on_day(self, day: date) -> Tuple[ReplacementGroup, ...]:
        if isinstance(day, datetime):
            day = day.date()
        document = self.fetcher.fetch(PageKey.DAY_REPLACEMENTS, {"date": day.isoformat()})
        return parse_day_replacements(document, day)

    def iter_replacements(self, min_date: date, max_date: Optional[date] = None) -> Iterator[ReplacementDay]:
        if max_date is None:
            max_date = self.today() + timedelta(days=1)

        def fetch_day(day: date):
            return self.fetcher.fetch(PageKey.DAY_REPLACEMENTS, {"date": day.isoformat()})

        return iter_replacements(fetch_day, min_date, max_date)

    def get_specialties(self) -> Tuple[SpecialtyDirectoryEntry, ...]:
        return parse_specialties(self.fetcher.fetch(PageKey.SPECIALTIES))

    def get_specialty_site(self, query: str) -> SpecialtySite:
        entry = find_specialty(self.get_specialties(), query)
        document = self.fetcher.fetch(PageKey.SPECIALTY_SITE, {"url": entry.url})
        return parse_specialty_site(entry, document, self.settings.host)

    def get_teachers(self) -> Tuple[Teacher, ...]:
        teachers = parse_teachers(self.fetcher.fetch(PageKey.TEACHERS), _origin(self.settings.teachers_url))
        logging.info("Parsed %d teachers", len(teachers))
        return teachers
