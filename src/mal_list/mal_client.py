"""MyAnimeList API client."""

import logging
from typing import Optional

from .base_client import MALTransport
from .constants import DEFAULT_BASE_URL, HTTP_NO_CONTENT, HTTP_UNAUTHORIZED, Category
from .exceptions import BadStatusError
from .list_client import ListClient
from .models import ENTRY_TYPES, INFO_TYPES, AnimeEntry, AnimeInfo, MangaEntry, MangaInfo, SeriesInfo
from .request import Operation, build_request
from .xml_codec import parse_document

logger = logging.getLogger(__name__)


class MALClient:
    """Client for the MyAnimeList XML API.

    Reading a list only needs a username; searching and every write need the
    account's password too.
    """

    def __init__(
        self,
        username: str,
        password: str = "",
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[MALTransport] = None,
    ):
        """Initialize client, building a transport unless one is given."""
        self.username = username
        self.transport = transport or MALTransport(username, password, base_url=base_url)

    @property
    def base_url(self) -> str:
        return self.transport.base_url

    def search(self, name: str, category: Category) -> list[SeriesInfo]:
        """Search for series by name. No results is an empty list, not an error."""
        category = Category(category)
        info_class = INFO_TYPES[category]
        request = build_request(self.base_url, Operation.SEARCH, category, name)
        response = self.transport.send(request)

        if response.status_code == HTTP_NO_CONTENT or not response.text.strip():
            logger.info(f"No {category.value} found for '{name}'")
            return []

        root = parse_document(response.text)
        results = [info_class.parse_search_result(child) for child in root]
        logger.info(f"Found {len(results)} {category.value} results for '{name}'")
        return results

    def search_anime(self, name: str) -> list[AnimeInfo]:
        return self.search(name, Category.ANIME)

    def search_manga(self, name: str) -> list[MangaInfo]:
        return self.search(name, Category.MANGA)

    def verify_credentials(self) -> bool:
        """Return True if the configured username and password are accepted."""
        request = build_request(self.base_url, Operation.VERIFY_CREDENTIALS)
        try:
            self.transport.send(request)
        except BadStatusError as e:
            if e.status_code == HTTP_UNAUTHORIZED:
                return False
            raise
        return True

    def list_for(self, category: Category) -> ListClient:
        return ListClient(self.transport, ENTRY_TYPES[Category(category)])

    def anime_list(self) -> ListClient[AnimeEntry]:
        return ListClient(self.transport, AnimeEntry)

    def manga_list(self) -> ListClient[MangaEntry]:
        return ListClient(self.transport, MangaEntry)
