"""Typed client for MyAnimeList's XML list API."""

from .constants import Category
from .enums import AiringStatus, AnimeType, MangaType, PublishingStatus, ReadStatus, WatchStatus
from .exceptions import (
    BadStatusError,
    ConversionFailedError,
    DecodeError,
    MALError,
    MissingNodeError,
    NoUserInfoFoundError,
    ProtocolInvariantError,
    RequestFailedError,
    TransportError,
    UnknownEnumValueError,
)
from .list_client import ListClient
from .mal_client import MALClient
from .models import (
    AnimeEntry,
    AnimeInfo,
    AnimeUserInfo,
    AnimeValues,
    ListEntries,
    MangaEntry,
    MangaInfo,
    MangaUserInfo,
    MangaValues,
)

__version__ = "0.1.0"
