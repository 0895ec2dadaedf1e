"""Enum codecs for the service's status and type families.

The service reports each category two ways: a small integer in list
snapshots (also used for every write) and a free-text label in search
results. Index tables are not contiguous and differ per family.
"""

from enum import Enum
from typing import Optional

from .exceptions import UnknownEnumValueError


class CodedEnum(Enum):
    """An enum member carrying its wire index and the labels it is searched by.

    The first label is the display name. Members are not ints, so members of
    different families never compare equal.
    """

    def __new__(cls, index: int, *labels: str):
        obj = object.__new__(cls)
        obj._value_ = index
        obj.labels = labels
        return obj

    @property
    def index(self) -> int:
        """The numeric value written to the wire."""
        return self._value_

    @classmethod
    def from_index(cls, index: int) -> Optional["CodedEnum"]:
        try:
            return cls(index)
        except ValueError:
            return None

    @classmethod
    def from_label(cls, label: str) -> Optional["CodedEnum"]:
        lowered = label.strip().lower()
        for member in cls:
            if lowered in member.labels:
                return member
        return None

    @classmethod
    def parse_index(cls, index: int) -> "CodedEnum":
        member = cls.from_index(index)
        if member is None:
            raise UnknownEnumValueError(cls.__name__, index)
        return member

    @classmethod
    def parse_label(cls, label: str) -> "CodedEnum":
        member = cls.from_label(label)
        if member is None:
            raise UnknownEnumValueError(cls.__name__, label)
        return member

    def __str__(self) -> str:
        return self.labels[0]


class WatchStatus(CodedEnum):
    """User's watch status for an anime. Index 5 is unused by the service."""

    WATCHING = 1, "watching"
    COMPLETED = 2, "completed"
    ON_HOLD = 3, "on hold", "on-hold", "onhold"
    DROPPED = 4, "dropped"
    PLAN_TO_WATCH = 6, "plan to watch", "plantowatch"

    @classmethod
    def default(cls) -> "WatchStatus":
        return cls.PLAN_TO_WATCH


class ReadStatus(CodedEnum):
    """User's read status for a manga. Index 5 is unused by the service."""

    READING = 1, "reading"
    COMPLETED = 2, "completed"
    ON_HOLD = 3, "on hold", "on-hold", "onhold"
    DROPPED = 4, "dropped"
    PLAN_TO_READ = 6, "plan to read", "plantoread"

    @classmethod
    def default(cls) -> "ReadStatus":
        return cls.PLAN_TO_READ


class AiringStatus(CodedEnum):
    AIRING = 1, "currently airing", "airing"
    FINISHED_AIRING = 2, "finished airing"
    NOT_YET_AIRED = 3, "not yet aired"

    @classmethod
    def default(cls) -> "AiringStatus":
        return cls.NOT_YET_AIRED


class PublishingStatus(CodedEnum):
    PUBLISHING = 1, "publishing"
    FINISHED = 2, "finished"
    NOT_YET_PUBLISHED = 3, "not yet published"

    @classmethod
    def default(cls) -> "PublishingStatus":
        return cls.NOT_YET_PUBLISHED


class AnimeType(CodedEnum):
    """Anime series type. The list API reports 0 when the type is unknown."""

    UNKNOWN = 0, "unknown"
    TV = 1, "tv"
    OVA = 2, "ova"
    MOVIE = 3, "movie"
    SPECIAL = 4, "special"
    ONA = 5, "ona"
    MUSIC = 6, "music"

    @classmethod
    def default(cls) -> "AnimeType":
        return cls.UNKNOWN


class MangaType(CodedEnum):
    """Manga series type. The list API reports 0 when the type is unknown."""

    UNKNOWN = 0, "unknown"
    MANGA = 1, "manga"
    NOVEL = 2, "novel", "light novel"
    ONE_SHOT = 3, "one-shot", "one shot", "oneshot"
    DOUJINSHI = 4, "doujinshi", "doujin"
    MANHWA = 5, "manhwa"
    MANHUA = 6, "manhua"
    OEL = 7, "oel"

    @classmethod
    def default(cls) -> "MangaType":
        return cls.UNKNOWN
