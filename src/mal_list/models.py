"""Data models for list entries and series information."""

from datetime import date, datetime, timezone
from typing import Any, Callable, ClassVar, Optional
from xml.etree.ElementTree import Element

from pydantic import BaseModel, ConfigDict, Field

from .constants import Category
from .enums import AiringStatus, AnimeType, MangaType, PublishingStatus, ReadStatus, WatchStatus
from .tracking import TrackedField, TrackedValues
from .xml_codec import (
    extract_flag_lenient,
    format_date,
    format_enum,
    format_flag,
    format_int,
    format_tags,
    index_reader,
    label_reader,
    read_date,
    read_float,
    read_int,
    read_str,
    read_synonyms,
    read_tags,
    read_timestamp,
)

# attribute name -> (tag, reader)
FieldTable = dict[str, tuple[str, Callable[[Element, str], Any]]]


def _read_table(xml: Element, table: FieldTable) -> dict[str, Any]:
    return {name: reader(xml, tag) for name, (tag, reader) in table.items()}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SeriesInfo(BaseModel):
    """Server-owned description of a series. Two infos are equal when their IDs are."""

    model_config = ConfigDict(frozen=True)

    category: ClassVar[Category]
    search_fields: ClassVar[FieldTable]
    list_fields: ClassVar[FieldTable]

    id: int
    title: str
    synonyms: tuple[str, ...] = ()
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    image_url: str = ""

    @classmethod
    def parse_search_result(cls, xml: Element) -> "SeriesInfo":
        """Parse one ``<entry>`` of a search response."""
        return cls(**_read_table(xml, cls.search_fields))

    @classmethod
    def parse_list_entry(cls, xml: Element) -> "SeriesInfo":
        """Parse the ``series_*`` part of one list snapshot record."""
        return cls(**_read_table(xml, cls.list_fields))

    def __eq__(self, other) -> bool:
        if not isinstance(other, SeriesInfo):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class AnimeInfo(SeriesInfo):
    """Anime series information."""

    category: ClassVar[Category] = Category.ANIME
    search_fields: ClassVar[FieldTable] = {
        "id": ("id", read_int),
        "title": ("title", read_str),
        "synonyms": ("synonyms", read_synonyms),
        "episodes": ("episodes", read_int),
        "airing_status": ("status", label_reader(AiringStatus)),
        "series_type": ("type", label_reader(AnimeType)),
        "start_date": ("start_date", read_date),
        "end_date": ("end_date", read_date),
        "image_url": ("image", read_str),
    }
    list_fields: ClassVar[FieldTable] = {
        "id": ("series_animedb_id", read_int),
        "title": ("series_title", read_str),
        "synonyms": ("series_synonyms", read_synonyms),
        "episodes": ("series_episodes", read_int),
        "airing_status": ("series_status", index_reader(AiringStatus)),
        "series_type": ("series_type", index_reader(AnimeType)),
        "start_date": ("series_start", read_date),
        "end_date": ("series_end", read_date),
        "image_url": ("series_image", read_str),
    }

    episodes: int = 0
    airing_status: AiringStatus = AiringStatus.default()
    series_type: AnimeType = AnimeType.default()


class MangaInfo(SeriesInfo):
    """Manga series information."""

    category: ClassVar[Category] = Category.MANGA
    search_fields: ClassVar[FieldTable] = {
        "id": ("id", read_int),
        "title": ("title", read_str),
        "synonyms": ("synonyms", read_synonyms),
        "chapters": ("chapters", read_int),
        "volumes": ("volumes", read_int),
        "publishing_status": ("status", label_reader(PublishingStatus)),
        "series_type": ("type", label_reader(MangaType)),
        "start_date": ("start_date", read_date),
        "end_date": ("end_date", read_date),
        "image_url": ("image", read_str),
    }
    list_fields: ClassVar[FieldTable] = {
        "id": ("series_mangadb_id", read_int),
        "title": ("series_title", read_str),
        "synonyms": ("series_synonyms", read_synonyms),
        "chapters": ("series_chapters", read_int),
        "volumes": ("series_volumes", read_int),
        "publishing_status": ("series_status", index_reader(PublishingStatus)),
        "series_type": ("series_type", index_reader(MangaType)),
        "start_date": ("series_start", read_date),
        "end_date": ("series_end", read_date),
        "image_url": ("series_image", read_str),
    }

    chapters: int = 0
    volumes: int = 0
    publishing_status: PublishingStatus = PublishingStatus.default()
    series_type: MangaType = MangaType.default()


class AnimeValues(TrackedValues):
    """User-editable values of an anime list entry."""

    watched_episodes = TrackedField("episode", "my_watched_episodes", read_int, format_int, int)
    status = TrackedField(
        "status", "my_status", index_reader(WatchStatus), format_enum, WatchStatus.default, coerce=WatchStatus
    )
    start_date = TrackedField("date_start", "my_start_date", read_date, format_date, lambda: None)
    finish_date = TrackedField("date_finish", "my_finish_date", read_date, format_date, lambda: None)
    score = TrackedField("score", "my_score", read_int, format_int, int)
    rewatching = TrackedField("enable_rewatching", "my_rewatching", extract_flag_lenient, format_flag, bool)
    tags = TrackedField("tags", "my_tags", read_tags, format_tags, list, view=tuple, coerce=list)

    def tags_mut(self) -> list[str]:
        """Return the live tag list. The tags are flagged as changed right away."""
        return self.tracker("tags").get_mut()


class MangaValues(TrackedValues):
    """User-editable values of a manga list entry."""

    chapter = TrackedField("chapter", "my_read_chapters", read_int, format_int, int)
    volume = TrackedField("volume", "my_read_volumes", read_int, format_int, int)
    status = TrackedField(
        "status", "my_status", index_reader(ReadStatus), format_enum, ReadStatus.default, coerce=ReadStatus
    )
    score = TrackedField("score", "my_score", read_int, format_int, int)
    start_date = TrackedField("date_start", "my_start_date", read_date, format_date, lambda: None)
    finish_date = TrackedField("date_finish", "my_finish_date", read_date, format_date, lambda: None)
    # the service really does spell it with two g's
    rereading = TrackedField("enable_rereading", "my_rereadingg", extract_flag_lenient, format_flag, bool)
    tags = TrackedField("tags", "my_tags", read_tags, format_tags, list, view=tuple, coerce=list)

    def tags_mut(self) -> list[str]:
        """Return the live tag list. The tags are flagged as changed right away."""
        return self.tracker("tags").get_mut()


class UserInfo(BaseModel):
    """Aggregate list statistics sent as the first record of a list snapshot."""

    fields_table: ClassVar[FieldTable]

    user_id: int
    completed: int = 0
    on_hold: int = 0
    dropped: int = 0
    days_spent_watching: float = 0.0

    @classmethod
    def parse(cls, xml: Element) -> "UserInfo":
        return cls(**_read_table(xml, cls.fields_table))


class AnimeUserInfo(UserInfo):
    fields_table: ClassVar[FieldTable] = {
        "user_id": ("user_id", read_int),
        "watching": ("user_watching", read_int),
        "completed": ("user_completed", read_int),
        "on_hold": ("user_onhold", read_int),
        "dropped": ("user_dropped", read_int),
        "plan_to_watch": ("user_plantowatch", read_int),
        "days_spent_watching": ("user_days_spent_watching", read_float),
    }

    watching: int = 0
    plan_to_watch: int = 0


class MangaUserInfo(UserInfo):
    fields_table: ClassVar[FieldTable] = {
        "user_id": ("user_id", read_int),
        "reading": ("user_reading", read_int),
        "completed": ("user_completed", read_int),
        "on_hold": ("user_onhold", read_int),
        "dropped": ("user_dropped", read_int),
        "plan_to_read": ("user_plantoread", read_int),
        "days_spent_watching": ("user_days_spent_watching", read_float),
    }

    reading: int = 0
    plan_to_read: int = 0


class ListEntry(BaseModel):
    """An entry on a user's list: a series snapshot plus the user's values.

    Subclasses bind a category to its info, values and user info types.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    category: ClassVar[Category]
    info_class: ClassVar[type[SeriesInfo]]
    values_class: ClassVar[type[TrackedValues]]
    user_info_class: ClassVar[type[UserInfo]]

    last_updated_time: datetime = Field(default_factory=_utcnow)

    @classmethod
    def parse(cls, xml: Element) -> "ListEntry":
        """Parse one record of a list snapshot. Nothing is flagged as changed."""
        return cls(
            series_info=cls.info_class.parse_list_entry(xml),
            last_updated_time=read_timestamp(xml, "my_last_updated"),
            values=cls.values_class.parse(xml),
        )

    @property
    def id(self) -> int:
        return self.series_info.id

    def mark_synced(self, now: Optional[datetime] = None) -> None:
        """Stamp the entry as synced. Only the list client calls this."""
        self.last_updated_time = now or _utcnow()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ListEntry):
            return NotImplemented
        return self.series_info == other.series_info


class AnimeEntry(ListEntry):
    """An anime on a user's list."""

    category: ClassVar[Category] = Category.ANIME
    info_class: ClassVar[type[SeriesInfo]] = AnimeInfo
    values_class: ClassVar[type[TrackedValues]] = AnimeValues
    user_info_class: ClassVar[type[UserInfo]] = AnimeUserInfo

    series_info: AnimeInfo
    values: AnimeValues = Field(default_factory=AnimeValues)


class MangaEntry(ListEntry):
    """A manga on a user's list."""

    category: ClassVar[Category] = Category.MANGA
    info_class: ClassVar[type[SeriesInfo]] = MangaInfo
    values_class: ClassVar[type[TrackedValues]] = MangaValues
    user_info_class: ClassVar[type[UserInfo]] = MangaUserInfo

    series_info: MangaInfo
    values: MangaValues = Field(default_factory=MangaValues)


class ListEntries(BaseModel):
    """The parsed result of reading a user's list."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user_info: UserInfo
    entries: list[ListEntry] = Field(default_factory=list)


ENTRY_TYPES: dict[Category, type[ListEntry]] = {
    Category.ANIME: AnimeEntry,
    Category.MANGA: MangaEntry,
}

INFO_TYPES: dict[Category, type[SeriesInfo]] = {
    Category.ANIME: AnimeInfo,
    Category.MANGA: MangaInfo,
}
