from __future__ import annotations


class MptError(Exception):
    pass


class ParseError(MptError):
    """Page layout changed enough that parsing cannot continue."""


class UnknownWeekError(ParseError):
    pass


class DateNotFoundError(ParseError):
    def __init__(self, text: str):
        super().__init__(f"No date found in replacements header '{text}'")
        self.text = text


class SpecialtyNotFoundError(ParseError):
    def __init__(self, query: str):
        super().__init__(f"No specialty matches '{query}'")
        self.query = query


class FetchError(MptError):
    def __init__(self, url: str, status: int):
        super().__init__(f"GET {url} returned HTTP {status}")
        self.url = url
        self.status = status
