"""Add, update, delete and read entries on a user's list."""

import logging
from typing import Generic, Optional, Protocol, TypeVar

from .exceptions import NoUserInfoFoundError
from .models import ListEntries, ListEntry
from .request import Operation, PreparedRequest, build_request
from .tracking import TrackedValues
from .xml_codec import build_body, parse_document

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=ListEntry)


class Transport(Protocol):
    """What the list client needs from a transport."""

    base_url: str
    username: str

    def send(self, request: PreparedRequest): ...


class ListClient(Generic[E]):
    """Operations on one of a user's lists.

    Values are only flagged as synced once the service has confirmed the
    write, so a failed add/update can be retried with the same values.
    """

    def __init__(self, transport: Transport, entry_class: type[E]):
        self.transport = transport
        self.entry_class = entry_class
        self.category = entry_class.category

    def _request(self, operation: Operation, target=None, body: Optional[str] = None) -> PreparedRequest:
        return build_request(self.transport.base_url, operation, self.category, target, body)

    def read_entries(self, username: Optional[str] = None) -> ListEntries:
        """Request and parse every entry on a user's list.

        Reads the transport's own user unless ``username`` is given.
        """
        username = username or self.transport.username
        response = self.transport.send(self._request(Operation.LIST, username))
        root = parse_document(response.text)
        children = iter(root)

        user_elem = next(children, None)
        if user_elem is None:
            raise NoUserInfoFoundError()
        user_info = self.entry_class.user_info_class.parse(user_elem)

        entries = [self.entry_class.parse(child) for child in children]
        logger.info(f"Fetched {len(entries)} {self.category.value} entries for {username}")
        return ListEntries(user_info=user_info, entries=entries)

    def add(self, entry: E) -> None:
        """Add an entry to the user's list.

        If the entry is already on the list, the service leaves it unchanged.
        """
        self.add_id(entry.id, entry.values)
        entry.mark_synced()

    def add_id(self, series_id: int, values: TrackedValues) -> None:
        """Add the series ``series_id`` to the user's list with ``values``."""
        self._write(Operation.ADD, series_id, values)

    def update(self, entry: E) -> None:
        """Send the entry's changed values to the service."""
        self.update_id(entry.id, entry.values)
        entry.mark_synced()

    def update_id(self, series_id: int, values: TrackedValues) -> None:
        """Update the series ``series_id`` on the user's list with ``values``."""
        self._write(Operation.UPDATE, series_id, values)

    def delete(self, entry: E) -> None:
        self.delete_id(entry.id)

    def delete_id(self, series_id: int) -> None:
        """Remove a series from the user's list.

        Deleting a series that isn't on the list is left to the service to judge.
        """
        self.transport.send(self._request(Operation.DELETE, series_id))
        logger.info(f"Deleted {self.category.value} {series_id} from list")

    def _write(self, operation: Operation, series_id: int, values: TrackedValues) -> None:
        changed = values.changed_fields()
        body = build_body(values)
        self.transport.send(self._request(operation, series_id, body))

        values.reset_changed_fields()
        logger.info(
            f"Sent {operation.value} for {self.category.value} {series_id} "
            f"(fields: {', '.join(changed) or 'none'})"
        )
