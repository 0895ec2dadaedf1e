"""HTTP transport for the MyAnimeList XML API."""

import logging
from typing import NamedTuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_FORBIDDEN,
    HTTP_TOO_MANY_REQUESTS,
    HTTP_UNAUTHORIZED,
    SUCCESS_CODES,
)
from .exceptions import BadStatusError, RequestFailedError
from .request import PreparedRequest

logger = logging.getLogger(__name__)


class TransportResponse(NamedTuple):
    status_code: int
    text: str


class MALTransport:
    """Sends prepared requests with basic auth and rate-limit back-off."""

    def __init__(
        self,
        username: str,
        password: str = "",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        """Initialize transport with account credentials.

        A password is only needed for operations other than reading a list.
        """
        self.username = username
        self.password = password
        self.base_url = base_url
        self.timeout = timeout
        self.session = requests.Session()

        # Configure retry strategy for rate limits (429)
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=[HTTP_TOO_MANY_REQUESTS],
            allowed_methods=["GET", "POST", "DELETE"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def _handle_auth_error(self, response: requests.Response) -> None:
        """Handle authentication errors consistently."""
        if response.status_code in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
            logger.error(f"MyAnimeList authentication failed (HTTP {response.status_code})")
            logger.error(f"Check the password configured for {self.username}")

    def send(self, request: PreparedRequest) -> TransportResponse:
        """Send ``request``, raising ``BadStatusError`` on any non-success status."""
        auth = (self.username, self.password) if request.authenticated else None
        logger.debug(f"{request.method} {request.url} params={request.params}")

        try:
            response = self.session.request(
                request.method,
                request.url,
                params=request.params or None,
                data=request.data,
                auth=auth,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Request to MyAnimeList failed: {e}")
            raise RequestFailedError(f"error sending request to MAL: {e}") from e

        if response.status_code not in SUCCESS_CODES:
            self._handle_auth_error(response)
            if response.status_code not in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
                logger.error(f"MyAnimeList API error: {response.status_code}")
                logger.debug(f"Response: {response.text}")
            raise BadStatusError(response.status_code, response.text)

        return TransportResponse(response.status_code, response.text)

    def close(self) -> None:
        self.session.close()
