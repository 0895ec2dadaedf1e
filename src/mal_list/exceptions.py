"""mal-list exception classes."""

from typing import Optional


class MALError(Exception):
    """Base class for all mal-list exceptions."""


# Decoding errors
class DecodeError(MALError):
    """Base class for failures turning service XML into typed values."""


class XMLParseError(DecodeError):
    """The response body is not well-formed XML."""


class MissingNodeError(DecodeError):
    """A required child element is not present."""

    def __init__(self, node: str):
        self.node = node
        super().__init__(f'no XML node named "{node}"')


class ConversionFailedError(DecodeError):
    """A child element's text could not be converted to the expected type."""

    def __init__(self, node: str, text: Optional[str] = None):
        self.node = node
        self.text = text
        super().__init__(f'failed to parse XML node "{node}" into appropriate type (got {text!r})')


class UnknownEnumValueError(DecodeError):
    """An index or label does not map to a known member of an enum family."""

    def __init__(self, family: str, value):
        self.family = family
        self.value = value
        super().__init__(f'"{value}" does not map to a known {family}')


# Transport errors
class TransportError(MALError):
    """Base class for failures talking to the service."""


class RequestFailedError(TransportError):
    """The request never produced a response (connection, timeout, ...)."""


class BadStatusError(TransportError):
    """The service answered with a non-success status code."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"received bad response code from MAL: {status_code}")


# Protocol errors
class ProtocolInvariantError(MALError):
    """A response was well-formed but broke the shape the service promises."""


class NoUserInfoFoundError(ProtocolInvariantError):
    """A list snapshot did not start with the user statistics element."""

    def __init__(self):
        super().__init__("no user info found")


# Configuration errors
class ConfigError(MALError):
    """The configuration file is unreadable or invalid."""
