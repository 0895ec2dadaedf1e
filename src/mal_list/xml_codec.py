"""Reading and writing the service's flat XML documents.

Responses are one root element whose children are flat records; every value
we need is the text of a uniquely named child of such a record. Writes are a
single ``<entry>`` element carrying only the changed fields.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Iterable, Optional, TypeVar
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

from .constants import (
    ENTRY_ELEMENT,
    NULL_DATE_READ,
    NULL_DATE_WRITE,
    READ_DATE_FORMAT,
    SYNONYM_DELIMITER,
    TAG_DELIMITER,
    WRITE_DATE_FORMAT,
)
from .enums import CodedEnum
from .exceptions import ConversionFailedError, DecodeError, MissingNodeError, UnknownEnumValueError, XMLParseError
from .tracking import TrackedValues

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=CodedEnum)


def parse_document(text: str) -> Element:
    """Parse a response body into its root element."""
    try:
        return ElementTree.fromstring(text)
    except ElementTree.ParseError as e:
        raise XMLParseError(f"failed to parse MAL response: {e}") from e


def get_child_text(elem: Element, name: str) -> str:
    """Return the text of the first child named ``name``; blank text is ``""``."""
    child = elem.find(name)
    if child is None:
        raise MissingNodeError(name)
    return child.text or ""


def extract(elem: Element, name: str, converter: Callable[[str], T] = str) -> T:
    """Return the child ``name`` converted with ``converter``."""
    text = get_child_text(elem, name)
    try:
        return converter(text)
    except UnknownEnumValueError:
        raise
    except (ValueError, TypeError, OverflowError, OSError, DecodeError) as e:
        raise ConversionFailedError(name, text) from e


def extract_flag_lenient(elem: Element, name: str) -> bool:
    """Read a ``0``/``1`` flag the service sometimes sends blank.

    Only the re-watching / re-reading flags need this; anything that isn't a
    number reads as ``False``. A missing node is still an error.
    """
    text = get_child_text(elem, name)
    try:
        return int(text) == 1
    except ValueError:
        logger.debug(f"Treating unparsable <{name}> value {text!r} as false")
        return False


def parse_date(text: str) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` date; the all-zero sentinel means no date.

    Partially known dates (``2009-00-00``) can't be represented and also read
    as ``None``.
    """
    text = text.strip()
    if not text or text == NULL_DATE_READ:
        return None
    try:
        return datetime.strptime(text, READ_DATE_FORMAT).date()
    except ValueError:
        logger.debug(f"Unparsable date {text!r}, treating as unset")
        return None


def format_date(value: Optional[date]) -> str:
    """Format a date as ``MMDDYYYY``; ``None`` becomes the all-zero sentinel."""
    if value is None:
        return NULL_DATE_WRITE
    return value.strftime(WRITE_DATE_FORMAT)


def split_list(text: str, delimiter: str) -> list[str]:
    """Split a delimited string, dropping empty pieces."""
    return [piece.strip() for piece in text.split(delimiter) if piece.strip()]


def join_list(items: Iterable[str], delimiter: str = TAG_DELIMITER) -> str:
    return delimiter.join(items)


def format_int(value: int) -> str:
    return str(int(value))


def format_flag(value: bool) -> str:
    return "1" if value else "0"


def format_enum(value: CodedEnum) -> str:
    return str(value.index)


def format_tags(value: Iterable[str]) -> str:
    return join_list(value, TAG_DELIMITER)


def to_unsigned(text: str) -> int:
    """Parse a count, score or ID. The service never sends negative ones."""
    value = int(text)
    if value < 0:
        raise ValueError(f"negative value {value}")
    return value


def to_timestamp(text: str) -> datetime:
    return datetime.fromtimestamp(to_unsigned(text), tz=timezone.utc)


# Readers take (element, tag) so they can be used in a values field table.


def read_int(elem: Element, name: str) -> int:
    return extract(elem, name, to_unsigned)


def read_float(elem: Element, name: str) -> float:
    return extract(elem, name, float)


def read_str(elem: Element, name: str) -> str:
    return extract(elem, name)


def read_date(elem: Element, name: str) -> Optional[date]:
    return parse_date(get_child_text(elem, name))


def read_synonyms(elem: Element, name: str) -> list[str]:
    return split_list(get_child_text(elem, name), SYNONYM_DELIMITER)


def read_tags(elem: Element, name: str) -> list[str]:
    return split_list(get_child_text(elem, name), TAG_DELIMITER)


def read_timestamp(elem: Element, name: str) -> datetime:
    return extract(elem, name, to_timestamp)


def index_reader(enum_cls: type[E]) -> Callable[[Element, str], E]:
    """Reader for an enum sent as its numeric index (list snapshots)."""

    def read(elem: Element, name: str) -> E:
        return enum_cls.parse_index(extract(elem, name, int))

    return read


def label_reader(enum_cls: type[E]) -> Callable[[Element, str], E]:
    """Reader for an enum sent as free text (search results)."""

    def read(elem: Element, name: str) -> E:
        return enum_cls.parse_label(get_child_text(elem, name))

    return read


def emit_dirty(values: TrackedValues) -> Element:
    """Build the ``<entry>`` element holding only the changed fields."""
    entry = Element(ENTRY_ELEMENT)
    for field, value in values.iter_changed():
        child = ElementTree.SubElement(entry, field.wire_tag)
        child.text = field.format(value)
    return entry


def serialize(elem: Element) -> str:
    """Render an element as a string, without an XML declaration."""
    return ElementTree.tostring(elem, encoding="unicode")


def build_body(values: TrackedValues) -> str:
    body = serialize(emit_dirty(values))
    logger.debug(f"Generated request body: {body}")
    return body
