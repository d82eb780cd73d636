from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple

from bs4 import Tag

from .models import Teacher
from .navigator import Document, attr, extract_text, load_document, select_all
from .normalizers import clean_text
from .utils import absolute_url

PHOTO_SELECTORS = ["div.entry-content img", "article img", "img[alt]"]
CASE_BOUNDARY_REGEX = re.compile(r"[а-яё](?=[А-ЯЁ])")
MIN_NAME_TOKENS = 2
MAX_NAME_TOKENS = 4

NameStrategy = Callable[[Tag], Optional[str]]


def is_valid_name(candidate: Optional[str]) -> bool:
    if not candidate:
        return False
    return MIN_NAME_TOKENS <= len(candidate.split()) <= MAX_NAME_TOKENS


def name_from_alt(photo: Tag) -> Optional[str]:
    candidate = clean_text(attr(photo, "alt"))
    return candidate if is_valid_name(candidate) else None


def name_from_siblings(photo: Tag) -> Optional[str]:
    for sibling in photo.next_siblings:
        candidate = extract_text(sibling)
        if is_valid_name(candidate):
            return candidate
    return None


def name_from_grandparent(photo: Tag) -> Optional[str]:
    """Cut a run-on "caption + full name" string at its first case boundary."""
    grandparent = photo.parent.parent if photo.parent is not None else None
    text = clean_text(grandparent.get_text()) if grandparent is not None else ""
    match = CASE_BOUNDARY_REGEX.search(text)
    if not match:
        return None
    candidate = text[match.end():].strip()
    return candidate if is_valid_name(candidate) else None


NAME_STRATEGIES: List[NameStrategy] = [
    name_from_alt,
    name_from_siblings,
    name_from_grandparent,
]


def recover_name(photo: Tag, strategies: List[NameStrategy] = NAME_STRATEGIES) -> Optional[str]:
    for strategy in strategies:
        candidate = strategy(photo)
        if candidate:
            return candidate
    return None


def _photo_url(host: str, src: str) -> str:
    if src.startswith("/") and not src.startswith("//"):
        return absolute_url(host, src)
    return src


def _find_link(doc: Document, full_name: str) -> Optional[str]:
    for anchor in doc.find_all("a", href=True):
        if full_name in extract_text(anchor):
            return attr(anchor, "href")
    return None


def parse_teachers(source, host: str) -> Tuple[Teacher, ...]:
    doc: Document = load_document(source)
    teachers: List[Teacher] = []
    for photo in select_all(doc, PHOTO_SELECTORS):
        full_name = recover_name(photo)
        if not full_name:
            logging.debug("Skipping photo %s: no name recovered", attr(photo, "src"))
            continue
        tokens = full_name.split()
        teachers.append(
            Teacher(
                surname=tokens[0],
                name=tokens[1],
                patronymic=" ".join(tokens[2:]),
                photo=_photo_url(host, attr(photo, "src")),
                link=_find_link(doc, full_name),
            )
        )
    logging.debug("Parsed %d teachers", len(teachers))
    return tuple(teachers)
