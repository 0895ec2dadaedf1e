"""Change tracking for user-editable list values.

Every field a user can edit on a list entry is held in a ``ChangeTracker``.
Only trackers flagged as changed are sent to the service on add/update, so a
field the caller never touched is never overwritten server side.
"""

import logging
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar
from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChangeTracker(Generic[T]):
    """A single value plus a "modified since last sync" flag."""

    __slots__ = ("value", "changed")

    def __init__(self, value: T):
        self.value = value
        self.changed = False

    def set(self, value: T) -> None:
        """Overwrite the value and flag it as changed.

        No equality check is made: re-asserting the current value is still a
        request to send it.
        """
        self.value = value
        self.changed = True

    def get_mut(self) -> T:
        """Return the live value for in-place mutation, flagging it as changed."""
        self.changed = True
        return self.value

    def reset(self) -> None:
        """Clear the changed flag after a confirmed sync."""
        self.changed = False

    def __repr__(self) -> str:
        return f"ChangeTracker({self.value!r}, changed={self.changed})"


class TrackedField:
    """Descriptor declaring one row of a values class' field table.

    Args:
        wire_tag: Tag name used in the add/update ``<entry>`` body.
        list_tag: Tag name used in the list snapshot.
        reader: ``reader(element, list_tag)`` decoding the snapshot value.
        writer: Formats the value as the text of ``wire_tag``.
        default: Factory for the value of a brand-new entry.
        view: Optional wrapper applied on attribute reads (e.g. ``tuple`` so a
            plain read of a collection can't mutate it behind the tracker).
        coerce: Optional conversion applied to assigned values.
    """

    def __init__(
        self,
        wire_tag: str,
        list_tag: str,
        reader: Callable[[Element, str], Any],
        writer: Callable[[Any], str],
        default: Callable[[], Any],
        view: Optional[Callable[[Any], Any]] = None,
        coerce: Optional[Callable[[Any], Any]] = None,
    ):
        self.wire_tag = wire_tag
        self.list_tag = list_tag
        self.reader = reader
        self.writer = writer
        self.default = default
        self.view = view
        self.coerce = coerce
        self.name = ""

    def __set_name__(self, owner, name: str) -> None:
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        value = instance.tracker(self.name).value
        return self.view(value) if self.view else value

    def __set__(self, instance, value) -> None:
        if self.coerce is not None:
            value = self.coerce(value)
        instance.tracker(self.name).set(value)

    def format(self, value) -> str:
        return self.writer(value)


class TrackedValues:
    """Base for a category's set of user-editable values.

    Subclasses declare their fields as ``TrackedField`` class attributes; the
    declaration order is the order fields are emitted on the wire.
    """

    fields: tuple[TrackedField, ...] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.fields = tuple(v for v in cls.__dict__.values() if isinstance(v, TrackedField))

    def __init__(self, **initial):
        self._trackers: dict[str, ChangeTracker] = {
            field.name: ChangeTracker(field.default()) for field in self.fields
        }
        if initial:
            self.update(**initial)

    @classmethod
    def parse(cls, xml: Element) -> "TrackedValues":
        """Build values from a list snapshot element, with nothing flagged as changed."""
        values = cls()
        for field in cls.fields:
            values._trackers[field.name] = ChangeTracker(field.reader(xml, field.list_tag))
        return values

    def tracker(self, name: str) -> ChangeTracker:
        try:
            return self._trackers[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__} has no field {name!r}") from None

    def update(self, **changes) -> "TrackedValues":
        """Set several fields at once. Returns ``self`` for chaining."""
        for name, value in changes.items():
            if name not in self._trackers:
                raise AttributeError(f"{type(self).__name__} has no field {name!r}")
            setattr(self, name, value)
        return self

    def changed_fields(self) -> list[str]:
        return [field.name for field in self.fields if self._trackers[field.name].changed]

    def is_changed(self) -> bool:
        return any(tracker.changed for tracker in self._trackers.values())

    def iter_changed(self) -> Iterator[tuple[TrackedField, Any]]:
        """Yield ``(field, value)`` for every changed field in table order."""
        for field in self.fields:
            tracker = self._trackers[field.name]
            if tracker.changed:
                yield field, tracker.value

    def reset_changed_fields(self) -> None:
        for tracker in self._trackers.values():
            tracker.reset()
        logger.debug(f"Reset change flags on {type(self).__name__}")

    def __eq__(self, other) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return all(
            self._trackers[f.name].value == other._trackers[f.name].value for f in self.fields
        )

    def __repr__(self) -> str:
        parts = ", ".join(f"{f.name}={self._trackers[f.name].value!r}" for f in self.fields)
        return f"{type(self).__name__}({parts})"
