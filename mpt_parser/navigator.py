from __future__ import annotations

from typing import Iterable, List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from .normalizers import clean_text

Document = Union[BeautifulSoup, Tag]


def load_document(source: Union[str, bytes, Document]) -> Document:
    if isinstance(source, (BeautifulSoup, Tag)):
        return source
    return BeautifulSoup(source, "lxml")


def find_first(node: Optional[Document], selectors: Iterable[str]) -> Optional[Tag]:
    """First element matched by the earliest selector that matches anything."""
    if node is None:
        return None
    for selector in selectors:
        el = node.select_one(selector)
        if el is not None:
            return el
    return None


def select_all(node: Optional[Document], selectors: Iterable[str]) -> List[Tag]:
    if node is None:
        return []
    for selector in selectors:
        found = node.select(selector)
        if found:
            return found
    return []


def extract_text(node) -> str:
    if node is None:
        return ""
    if isinstance(node, NavigableString):
        return clean_text(str(node))
    return clean_text(node.get_text(" ", strip=True))


def attr(node: Optional[Tag], name: str) -> str:
    if node is None:
        return ""
    value = node.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def element_children(node: Optional[Tag], skip: Iterable[str] = ("br",)) -> List[Tag]:
    if node is None:
        return []
    skipped = set(skip)
    return [child for child in node.children if isinstance(child, Tag) and child.name not in skipped]


def child_at(node: Optional[Tag], index: int) -> Optional[Tag]:
    children = element_children(node)
    return children[index] if 0 <= index < len(children) else None


def cells(row: Tag) -> List[Tag]:
    return row.find_all(["td", "th"], recursive=False)


def cell_at(row: Tag, index: int) -> Optional[Tag]:
    found = cells(row)
    return found[index] if index < len(found) else None


def body_rows(table: Tag) -> List[Tag]:
    """Rows of a table without its header row."""
    return table.find_all("tr")[1:]
