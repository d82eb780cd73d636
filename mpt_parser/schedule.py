from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from bs4 import Tag

from .errors import UnknownWeekError
from .models import Day, Group, Lesson, Specialty, Week
from .navigator import (
    Document,
    cell_at,
    body_rows,
    child_at,
    element_children,
    extract_text,
    find_first,
    load_document,
    select_all,
)
from .normalizers import (
    ABSENT,
    PLACEHOLDER,
    clean_text,
    or_absent,
    parse_int,
    repair_encoded,
    resolve_weekday,
    split_groups,
    strip_prefix,
)

SPECIALTY_PREFIX = "Расписание занятий для"
GROUP_PREFIX = "Группа"
PLACE_REGEX = re.compile(r"[(\[]([^)\]]*)[)\]]")

WEEK_LABEL_SELECTORS = ["span.label", ".label"]
SPECIALTY_SELECTORS = ["div.tab-pane:has(> h2)", "div:has(> h2)"]
GROUP_SELECTORS = ["div.tab-pane:has(> h3)", "div:has(> h3)"]
CAPTION_SELECTORS = ["caption", "thead h4", "h4"]


def parse_current_week(source) -> Week:
    doc = load_document(source)
    label = extract_text(find_first(doc, WEEK_LABEL_SELECTORS))
    if re.search(Week.DENOMINATOR.value, label, re.IGNORECASE):
        return Week.DENOMINATOR
    if re.search(Week.NUMERATOR.value, label, re.IGNORECASE):
        return Week.NUMERATOR
    raise UnknownWeekError(f"Unknown week label '{label}'")


def _parse_caption(caption: Optional[Tag]) -> Tuple[str, str]:
    text = extract_text(caption)
    match = PLACE_REGEX.search(text)
    if not match:
        return text, ABSENT
    place = or_absent(match.group(1))
    day_name = clean_text(text[: match.start()] + " " + text[match.end():])
    return day_name, place


def _pair(cell: Optional[Tag]) -> Tuple[str, str]:
    first = extract_text(child_at(cell, 0)) or PLACEHOLDER
    second = extract_text(child_at(cell, 1)) or PLACEHOLDER
    return first, second


def _parse_lesson(row: Tag) -> Optional[Lesson]:
    num = parse_int(extract_text(cell_at(row, 0)))
    if num == 0:
        return None
    name_cell = cell_at(row, 1)
    teacher_cell = cell_at(row, 2)
    if element_children(name_cell):
        return Lesson(num=num, name=_pair(name_cell), teacher=_pair(teacher_cell))
    return Lesson(
        num=num,
        name=(or_absent(extract_text(name_cell)),),
        teacher=(or_absent(extract_text(teacher_cell)),),
    )


def _parse_day(table: Tag) -> Day:
    day_name, place = _parse_caption(find_first(table, CAPTION_SELECTORS))
    num = resolve_weekday(day_name)
    if num == -1:
        logging.warning("Unknown weekday '%s'", day_name)
    lessons = []
    for row in body_rows(table):
        lesson = _parse_lesson(row)
        if lesson is not None:
            lessons.append(lesson)
    return Day(num=num, place=place, lessons=tuple(lessons))


def _parse_group_block(block: Tag) -> List[Group]:
    label = extract_text(block.find("h3"))
    names = split_groups(strip_prefix(repair_encoded(label), GROUP_PREFIX))
    if not names:
        logging.warning("Group block without group names: '%s'", label)
        return []
    days = tuple(_parse_day(table) for table in block.find_all("table"))
    return [Group(name=name, days=days) for name in names]


def parse_schedule(source) -> Tuple[Specialty, ...]:
    doc: Document = load_document(source)
    specialties: List[Specialty] = []
    for block in select_all(doc, SPECIALTY_SELECTORS):
        name = strip_prefix(extract_text(block.find("h2")), SPECIALTY_PREFIX)
        groups: List[Group] = []
        for group_block in select_all(block, GROUP_SELECTORS):
            groups.extend(_parse_group_block(group_block))
        specialties.append(Specialty(name=name, groups=tuple(groups)))
    logging.debug("Parsed %d specialties", len(specialties))
    return tuple(specialties)
