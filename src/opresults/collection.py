"""Ordered, mutable collection of messages with severity queries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSequence
from typing import overload

from .errors import require
from .messages import Message, Severity


class MessageCollection(MutableSequence[Message]):
    """List of messages owned by a single operation result.

    Supports the full mutable-sequence protocol (append, extend, insert,
    remove, pop, del, index, count, ``in``). Duplicates and None entries are
    accepted; None never matches a severity query.

    Severity queries scan on every call, so they never go stale after a
    mutation. Not thread-safe: callers sharing a collection across threads
    must serialize access themselves.
    """

    __slots__ = ("_items",)

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        self._items: list[Message] = list(messages)

    # ─────────────────────────────────────────────────────────────────
    # Sequence protocol
    # ─────────────────────────────────────────────────────────────────

    @overload
    def __getitem__(self, index: int) -> Message: ...
    @overload
    def __getitem__(self, index: slice) -> MessageCollection: ...

    def __getitem__(self, index: int | slice) -> Message | MessageCollection:
        if isinstance(index, slice):
            return MessageCollection(self._items[index])
        return self._items[index]

    def __setitem__(self, index: int, value: Message) -> None:  # type: ignore[override]
        self._items[index] = value

    def __delitem__(self, index: int | slice) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._items)

    def insert(self, index: int, value: Message) -> None:
        self._items.insert(index, value)

    def append(self, value: Message) -> None:
        self._items.append(value)

    def extend(self, values: Iterable[Message]) -> None:
        """Append every message of values, in order.

        Raises:
            ArgumentError: If values is None (None elements are fine)
        """
        require(values, "values")
        if values is self:
            values = list(values)
        self._items.extend(values)

    def clear(self) -> None:
        self._items.clear()

    def copy(self) -> MessageCollection:
        """Shallow copy with independent identity."""
        return MessageCollection(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MessageCollection):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MessageCollection({self._items!r})"

    # ─────────────────────────────────────────────────────────────────
    # Severity queries
    # ─────────────────────────────────────────────────────────────────

    def has_severity(self, severity: Severity) -> bool:
        return any(m is not None and m.severity == severity for m in self._items)

    def has_error(self) -> bool:
        """Whether any message has ERROR severity."""
        return self.has_severity(Severity.ERROR)

    def has_warning(self) -> bool:
        """Whether any message has WARNING severity."""
        return self.has_severity(Severity.WARNING)

    def has_information(self) -> bool:
        """Whether any message has INFORMATION severity."""
        return self.has_severity(Severity.INFORMATION)

    def of_severity(self, severity: Severity) -> list[Message]:
        """Messages with the given severity, in order."""
        return [m for m in self._items if m is not None and m.severity == severity]
