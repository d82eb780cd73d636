from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from bs4 import Tag
from rapidfuzz import fuzz, process

from .errors import SpecialtyNotFoundError
from .models import (
    GroupLeaderRole,
    GroupLeaders,
    SpecialtyDirectoryEntry,
    SpecialtySite,
    SpecialtySiteItem,
)
from .navigator import (
    Document,
    attr,
    cell_at,
    element_children,
    extract_text,
    find_first,
    load_document,
    select_all,
)
from .normalizers import parse_date, parse_datetime
from .utils import absolute_url

CODE_REGEX = re.compile(r"\d{2}\.\d{2}\.\d{2}(?:\s?\([А-ЯЁA-Z]+\))?|Отделение первого курса")
FUZZY_SCORE_CUTOFF = 70

DIRECTORY_ITEM_SELECTORS = ["div.tab-content ul li", "main ul li", "ul li"]
SECTION_HEADINGS = ["h2", "h3", "h4"]
SECTION_ITEM_SELECTORS = ["li", "tr", "div.item"]
DATE_SELECTORS = [".date", "time", "small", "span"]
LEADERS_SELECTORS = ["#groups-leaders", ".groups-leaders"]
LEADERS_HEADING = re.compile(r"актив", re.IGNORECASE)
IMPORTANT_HEADING = re.compile(r"важная информация", re.IGNORECASE)
NEWS_HEADING = re.compile(r"новости", re.IGNORECASE)
EXAM_HEADING = re.compile(r"вопрос", re.IGNORECASE)


def parse_specialties(source) -> Tuple[SpecialtyDirectoryEntry, ...]:
    doc: Document = load_document(source)
    entries: List[SpecialtyDirectoryEntry] = []
    for item in select_all(doc, DIRECTORY_ITEM_SELECTORS):
        anchor = item.find("a")
        if anchor is None:
            continue
        name = extract_text(anchor)
        match = CODE_REGEX.search(name)
        if not match:
            logging.warning("No specialty code in '%s'", name)
        entries.append(
            SpecialtyDirectoryEntry(
                name=name,
                code=match.group(0) if match else "",
                url=attr(anchor, "href"),
            )
        )
    return tuple(entries)


def find_specialty(entries: Sequence[SpecialtyDirectoryEntry], query: str) -> SpecialtyDirectoryEntry:
    needle = " ".join(query.split()).lower()
    for entry in entries:
        if entry.code and entry.code.lower() == needle:
            return entry
    for entry in entries:
        if needle and needle in entry.name.lower():
            return entry
    names = [entry.name.lower() for entry in entries]
    result = process.extractOne(needle, names, scorer=fuzz.partial_ratio, score_cutoff=FUZZY_SCORE_CUTOFF)
    if result is None:
        raise SpecialtyNotFoundError(query)
    logging.info("Fuzzy matched '%s' to '%s' (score %.0f)", query, entries[result[2]].name, result[1])
    return entries[result[2]]


def _find_heading(doc: Document, pattern: re.Pattern) -> Optional[Tag]:
    for heading in doc.find_all(SECTION_HEADINGS):
        if pattern.search(extract_text(heading)):
            return heading
    return None


def _section_container(doc: Document, pattern: re.Pattern) -> Optional[Tag]:
    heading = _find_heading(doc, pattern)
    if heading is None:
        return None
    container = heading.find_next_sibling()
    return container if container is not None else heading.parent


def _parse_section(
    doc: Document,
    pattern: re.Pattern,
    host: str,
    parse_when: Callable[[str], Optional[datetime]],
) -> Tuple[SpecialtySiteItem, ...]:
    container = _section_container(doc, pattern)
    if container is None:
        logging.debug("Section '%s' not found", pattern.pattern)
        return ()
    items: List[SpecialtySiteItem] = []
    for item in select_all(container, SECTION_ITEM_SELECTORS):
        anchor = item.find("a")
        if anchor is None:
            continue
        when = parse_when(extract_text(find_first(item, DATE_SELECTORS))) or parse_when(extract_text(item))
        items.append(
            SpecialtySiteItem(
                name=extract_text(anchor),
                url=absolute_url(host, attr(anchor, "href")),
                date=when,
            )
        )
    return tuple(items)


def _leaders_container(doc: Document) -> Optional[Tag]:
    container = find_first(doc, LEADERS_SELECTORS)
    if container is not None:
        return container
    return _section_container(doc, LEADERS_HEADING)


def _parse_role(table: Tag, host: str) -> Optional[GroupLeaderRole]:
    rows = table.find_all("tr")
    if not rows:
        return None
    row = rows[-1]
    photo_cell = cell_at(row, 0)
    photo = attr(photo_cell.find("img"), "src") if photo_cell is not None else ""
    role = extract_text(cell_at(row, 1))
    name = extract_text(cell_at(row, 2))
    if not role and not name:
        return None
    return GroupLeaderRole(photo=absolute_url(host, photo), role=role, name=name)


def _parse_group_leaders(doc: Document, host: str) -> Tuple[GroupLeaders, ...]:
    container = _leaders_container(doc)
    if container is None:
        return ()
    panes = container.select("div.tab-pane") or element_children(container)
    rosters: List[GroupLeaders] = []
    for pane in panes:
        roles = [role for role in (_parse_role(table, host) for table in pane.find_all("table")) if role]
        if not roles:
            continue
        rosters.append(GroupLeaders(name=extract_text(pane.find(["h3", "h4"])), roles=tuple(roles)))
    return tuple(rosters)


def parse_specialty_site(entry: SpecialtyDirectoryEntry, source, host: str) -> SpecialtySite:
    doc: Document = load_document(source)
    return SpecialtySite(
        name=entry.name,
        code=entry.code,
        url=entry.url,
        important_information=_parse_section(doc, IMPORTANT_HEADING, host, parse_date),
        news=_parse_section(doc, NEWS_HEADING, host, parse_date),
        exam_questions=_parse_section(doc, EXAM_HEADING, host, parse_datetime),
        groups_leaders=_parse_group_leaders(doc, host),
    )
