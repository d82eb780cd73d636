from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List, Optional
from urllib.parse import unquote

from .models import ReplacementLesson

ABSENT = "Отсутствует"
PLACEHOLDER = "-"

# Sunday-first, matches datetime.isoweekday() % 7
WEEKDAYS_RU = [
    "Воскресенье",
    "Понедельник",
    "Вторник",
    "Среда",
    "Четверг",
    "Пятница",
    "Суббота",
]

DATE_REGEX = re.compile(r"\b(\d{2})\.(\d{2})\.(\d{4})\b")
DATETIME_REGEX = re.compile(r"\b\d{2}\.\d{2}\.\d{4}\s+\d{2}:\d{2}:\d{2}\b")
INITIALS_FIRST_REGEX = re.compile(r"[А-ЯЁ]\.\s?[А-ЯЁ]\.\s?[А-ЯЁ][а-яё]+(?:-[А-ЯЁ][а-яё]+)?")
SURNAME_FIRST_REGEX = re.compile(r"[А-ЯЁ][а-яё]+(?:-[А-ЯЁ][а-яё]+)?\s+[А-ЯЁ]\.\s?[А-ЯЁ]\.")
TRAILING_INITIALS_REGEX = re.compile(r"[А-ЯЁ]\.\s?[А-ЯЁ]\.$")
GROUP_SEPARATOR = ", "
JS_ESCAPE_REGEX = re.compile(r"%u([0-9A-Fa-f]{4})")

_GROUP_CODE_TABLE = str.maketrans({
    "О": "0",  # cyrillic
    "о": "0",
    "O": "0",  # latin
    "o": "0",
})


def clean_text(text: Optional[str]) -> str:
    if not text:
        return ""
    return " ".join(text.replace("\xa0", " ").split())


def or_absent(text: Optional[str], default: str = ABSENT) -> str:
    text = clean_text(text)
    return text if text else default


def resolve_weekday(text: str) -> int:
    lowered = (text or "").lower()
    for index, name in enumerate(WEEKDAYS_RU):
        if name.lower() in lowered:
            return index
    return -1


def normalize_group_code(code: str) -> str:
    return clean_text(code).translate(_GROUP_CODE_TABLE)


def split_groups(text: str) -> List[str]:
    """Split a caption like ``"П50-1-21, П50-2-21"`` into normalized codes."""
    groups = []
    for raw in clean_text(text).split(GROUP_SEPARATOR):
        code = normalize_group_code(raw.strip(" ,"))
        if code:
            groups.append(code)
    return groups


def strip_prefix(text: str, prefix: str) -> str:
    return re.sub(rf"^\s*{re.escape(prefix)}\s*", "", text, flags=re.IGNORECASE).strip()


def repair_encoded(text: str) -> str:
    """Undo ``%XX``/``%uXXXX`` escaping left in some group labels.

    Anything that fails to decode is returned untouched.
    """
    if not text or "%" not in text:
        return text
    try:
        repaired = JS_ESCAPE_REGEX.sub(lambda m: chr(int(m.group(1), 16)), text)
        return unquote(repaired, errors="strict")
    except (UnicodeDecodeError, ValueError) as exc:
        logging.debug("Unable to repair encoded text '%s': %s", text, exc)
        return text


def parse_lesson_text(text: str) -> ReplacementLesson:
    """Split a "subject + teacher" cell.

    Every teacher-shaped run is cut out of the text; the runs joined with
    ", " become the teacher. "I.I. Surname" is tried first unless the cell
    ends with initials.
    """
    text = clean_text(text)
    patterns = [INITIALS_FIRST_REGEX, SURNAME_FIRST_REGEX]
    if TRAILING_INITIALS_REGEX.search(text):
        patterns.reverse()
    for pattern in patterns:
        teachers = [match.group(0) for match in pattern.finditer(text)]
        if teachers:
            break
    else:
        return ReplacementLesson(name=or_absent(text), teacher=ABSENT)
    name = pattern.sub(" ", text)
    name = clean_text(name).strip(" ,;")
    return ReplacementLesson(name=or_absent(name), teacher=", ".join(teachers))


def parse_date(text: str) -> Optional[datetime]:
    match = DATE_REGEX.search(text or "")
    if not match:
        return None
    try:
        return datetime.strptime(match.group(0), "%d.%m.%Y")
    except ValueError:
        logging.warning("Invalid date '%s'", match.group(0))
        return None


def parse_datetime(text: str) -> Optional[datetime]:
    match = DATETIME_REGEX.search(text or "")
    if not match:
        return None
    try:
        return datetime.strptime(" ".join(match.group(0).split()), "%d.%m.%Y %H:%M:%S")
    except ValueError:
        logging.warning("Invalid timestamp '%s'", match.group(0))
        return None


def parse_int(text: str, default: int = 0) -> int:
    match = re.search(r"\d+", text or "")
    return int(match.group(0)) if match else default
