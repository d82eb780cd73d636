from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple


def _jsonable(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class Record:
    def to_dict(self) -> dict:
        return _jsonable(asdict(self))


class Week(str, Enum):
    NUMERATOR = "Числитель"
    DENOMINATOR = "Знаменатель"


@dataclass(frozen=True)
class Lesson(Record):
    num: int
    name: Tuple[str, ...]
    teacher: Tuple[str, ...]

    @property
    def is_alternating(self) -> bool:
        return len(self.name) > 1


@dataclass(frozen=True)
class Day(Record):
    num: int
    place: str
    lessons: Tuple[Lesson, ...] = ()


@dataclass(frozen=True)
class Group(Record):
    name: str
    days: Tuple[Day, ...] = ()


@dataclass(frozen=True)
class Specialty(Record):
    name: str
    groups: Tuple[Group, ...] = ()


@dataclass(frozen=True)
class ReplacementLesson(Record):
    name: str
    teacher: str


@dataclass(frozen=True)
class ReplacementItem(Record):
    num: int
    old: ReplacementLesson
    new: ReplacementLesson
    created: Optional[datetime]


@dataclass(frozen=True)
class ReplacementGroup(Record):
    group: str
    replacements: Tuple[ReplacementItem, ...] = ()


@dataclass(frozen=True)
class ReplacementDay(Record):
    date: date
    groups: Tuple[ReplacementGroup, ...] = ()


@dataclass(frozen=True)
class SpecialtyDirectoryEntry(Record):
    name: str
    code: str
    url: str


@dataclass(frozen=True)
class SpecialtySiteItem(Record):
    name: str
    url: str
    date: Optional[datetime]


@dataclass(frozen=True)
class GroupLeaderRole(Record):
    photo: str
    role: str
    name: str


@dataclass(frozen=True)
class GroupLeaders(Record):
    name: str
    roles: Tuple[GroupLeaderRole, ...] = ()


@dataclass(frozen=True)
class SpecialtySite(SpecialtyDirectoryEntry):
    important_information: Tuple[SpecialtySiteItem, ...] = field(default=())
    news: Tuple[SpecialtySiteItem, ...] = field(default=())
    exam_questions: Tuple[SpecialtySiteItem, ...] = field(default=())
    groups_leaders: Tuple[GroupLeaders, ...] = field(default=())


@dataclass(frozen=True)
class Teacher(Record):
    surname: str
    name: str
    patronymic: str
    photo: str
    link: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.surname, self.name, self.patronymic) if part)
