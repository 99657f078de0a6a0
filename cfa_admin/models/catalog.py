from dataclasses import dataclass
from typing import NamedTuple


class ChapterEntry(NamedTuple):
    name: str
    code: str


@dataclass(frozen=True)
class Subject:
    name: str
    chapters: tuple[ChapterEntry, ...] = ()


@dataclass(frozen=True)
class Level:
    name: str
    subjects: tuple[Subject, ...] = ()
