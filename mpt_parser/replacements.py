from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterator, List, Optional, Tuple

from bs4 import Tag

from .errors import DateNotFoundError
from .models import ReplacementDay, ReplacementGroup, ReplacementItem
from .navigator import (
    Document,
    body_rows,
    cell_at,
    element_children,
    extract_text,
    find_first,
    load_document,
)
from .normalizers import parse_date, parse_datetime, parse_int, parse_lesson_text, split_groups
from .utils import iter_days, midnight

CONTENT_SELECTORS = ["div.table-responsive", "table"]
# date headers, for bulletins without any table
HEADER_SELECTORS = ["h4", "h3"]
BODY_SELECTORS = ["body"]


def _table_of(block: Tag) -> Optional[Tag]:
    if block.name == "table":
        return block
    return block.find("table")


def _parse_item(row: Tag, created: Optional[datetime]) -> Optional[ReplacementItem]:
    if cell_at(row, 2) is None:
        logging.debug("Skipping short replacement row '%s'", extract_text(row))
        return None
    if created is None:
        created = parse_datetime(extract_text(cell_at(row, 3)))
    return ReplacementItem(
        num=parse_int(extract_text(cell_at(row, 0))),
        old=parse_lesson_text(extract_text(cell_at(row, 1))),
        new=parse_lesson_text(extract_text(cell_at(row, 2))),
        created=created,
    )


def _parse_table(table: Tag, created: Optional[datetime] = None) -> List[ReplacementGroup]:
    """One table is one or more groups sharing the same items."""
    names = split_groups(extract_text(table.find("caption")))
    items = []
    for row in body_rows(table):
        item = _parse_item(row, created)
        if item is not None:
            items.append(item)
    replacements = tuple(items)
    return [ReplacementGroup(group=name, replacements=replacements) for name in names]


def parse_replacements(source) -> Tuple[ReplacementDay, ...]:
    doc: Document = load_document(source)
    first_block = find_first(doc, CONTENT_SELECTORS) or find_first(doc, HEADER_SELECTORS)
    if first_block is None:
        logging.warning("No replacement blocks found")
        return ()

    days: List[ReplacementDay] = []
    current_date: Optional[date] = None
    current_groups: List[ReplacementGroup] = []

    for block in element_children(first_block.parent)[1:]:
        table = _table_of(block)
        if table is None:
            text = extract_text(block)
            parsed = parse_date(text)
            if parsed is None:
                raise DateNotFoundError(text)
            if current_date is not None:
                days.append(ReplacementDay(date=current_date, groups=tuple(current_groups)))
            current_date = parsed.date()
            current_groups = []
            continue
        if current_date is None:
            logging.warning("Replacement table before any date header, skipping")
            continue
        current_groups.extend(_parse_table(table))

    if current_date is not None:
        days.append(ReplacementDay(date=current_date, groups=tuple(current_groups)))
    return tuple(days)


def parse_day_replacements(source, day) -> Tuple[ReplacementGroup, ...]:
    doc: Document = load_document(source)
    created = midnight(day)
    body = find_first(doc, BODY_SELECTORS) or doc
    groups: List[ReplacementGroup] = []
    for block in element_children(body)[1:]:
        table = _table_of(block)
        if table is None:
            continue
        groups.extend(_parse_table(table, created))
    return tuple(groups)


def iter_replacements(
    fetch_day: Callable[[date], Document],
    min_date: date,
    max_date: date,
) -> Iterator[ReplacementDay]:
    """Yield one ``ReplacementDay`` per date in ``[min_date, max_date)``.

    Each batch is the day's ``ReplacementGroup`` tuple, carried in
    ``ReplacementDay.groups`` with the requested date alongside it.

    ``fetch_day`` is called lazily, after the previous batch was consumed.
    """
    for day in iter_days(min_date, max_date):
        document = fetch_day(day)
        yield ReplacementDay(date=day, groups=parse_day_replacements(document, day))
