"""Constants used throughout the library."""

from enum import Enum


class Category(str, Enum):
    """List categories supported by the service."""

    ANIME = "anime"
    MANGA = "manga"


# HTTP Status Codes
HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NO_CONTENT = 204
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429

SUCCESS_CODES = (HTTP_OK, HTTP_CREATED, HTTP_NO_CONTENT)

# Default values
DEFAULT_BASE_URL = "https://myanimelist.net"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MAX_RETRIES = 3

# Wire format
ENTRY_ELEMENT = "entry"
NULL_DATE_READ = "0000-00-00"  # how the service sends an unset date
NULL_DATE_WRITE = "00000000"  # how the service expects an unset date
READ_DATE_FORMAT = "%Y-%m-%d"
WRITE_DATE_FORMAT = "%m%d%Y"
SYNONYM_DELIMITER = "; "
TAG_DELIMITER = ","
