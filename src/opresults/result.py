"""Operation results: success derived from messages, with an optional value.

Examples:
    >>> result = OperationResult.success()
    >>> result.succeeded
    True

    >>> failed = OperationResult.failure(ValueError("bad input"))
    >>> failed.succeeded, failed.messages[0].details["message"]
    (False, 'bad input')

    >>> found = ValueResult.success(42)
    >>> found.has_value(), found.value
    (True, 42)

    Fluent reactions instead of branching:
    >>> seen = []
    >>> _ = failed.on(success=lambda r: seen.append("ok"), failure=lambda r: seen.append("fail"))
    >>> seen
    ['fail']
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Callable, Generic, Self, TypeVar, overload

from .collection import MessageCollection
from .errors import ArgumentError
from .messages import Message, ProblemDetails, Severity
from .settings import get_settings

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")
R = TypeVar("R", bound="OperationResult")


def _failure_messages(
    items: Sequence[Any],
    severity: Severity | None,
) -> list[Message]:
    """Messages a failure factory should hold, from its positional arguments.

    A single list (or any non-string iterable) of messages is unpacked; a
    single mapping is read as a problem-details payload.
    """
    if len(items) == 1:
        item = items[0]
        if item is None:
            raise ArgumentError.missing("messages")
        if isinstance(item, (ProblemDetails, Mapping)):
            return [Message.from_problem_details(item, severity or Severity.ERROR)]
        if severity is not None:
            raise ArgumentError("severity", "only valid with a problem-details payload")
        if isinstance(item, BaseException):
            return [Message.from_exception(item)]
        if isinstance(item, Iterable) and not isinstance(item, (str, bytes)):
            items = tuple(item)
    elif severity is not None:
        raise ArgumentError("severity", "only valid with a problem-details payload")
    for item in items:
        if not isinstance(item, Message):
            raise ArgumentError("messages", f"expected Message, got {type(item).__name__}")
    return list(items)


class OperationResult:
    """Outcome of an operation: a collection of messages, succeeded unless one is an ERROR.

    Warnings and information never affect success. The message collection is
    created empty and mutated in place, never replaced.

    Use the success()/failure() factories rather than the constructor.
    """

    __slots__ = ("_messages",)

    def __init__(self) -> None:
        self._messages = MessageCollection()

    @property
    def messages(self) -> MessageCollection:
        return self._messages

    @property
    def succeeded(self) -> bool:
        return not self._messages.has_error()

    def has_messages(self) -> bool:
        """Whether any message is present, whatever its severity."""
        return len(self._messages) > 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(succeeded={self.succeeded}, messages={list(self._messages)!r})"

    # ─────────────────────────────────────────────────────────────────
    # Factories
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def success(cls) -> Self:
        """Successful result with no messages."""
        return cls()

    @overload
    @classmethod
    def failure(cls, exception: BaseException, /) -> Self: ...
    @overload
    @classmethod
    def failure(cls, problem: ProblemDetails | Mapping[str, Any], /, *, severity: Severity | None = None) -> Self: ...
    @overload
    @classmethod
    def failure(cls, messages: Iterable[Message], /) -> Self: ...
    @overload
    @classmethod
    def failure(cls, *messages: Message) -> Self: ...

    @classmethod
    def failure(cls, *items: Any, severity: Severity | None = None) -> Self:
        """Result holding the given messages, or one message wrapping an exception or problem details.

        Messages may be passed one by one or as a single list. A
        problem-details payload (model or mapping) defaults to ERROR severity;
        pass severity to override. A result built only from non-error
        messages still counts as succeeded.

        Raises:
            ArgumentError: If no messages are given, an item is not a Message, or
                severity is given without problem details
        """
        messages = _failure_messages(items, severity) if items else []
        if not messages:
            raise ArgumentError.empty("messages")
        result = cls()
        result._messages.extend(messages)
        return result

    # ─────────────────────────────────────────────────────────────────
    # Conversion & continuations (see combinators)
    # ─────────────────────────────────────────────────────────────────

    def to_result(self) -> OperationResult:
        """Copy messages into a new non-value result."""
        from .combinators import to_result
        return to_result(self)

    def to_value_result(self) -> ValueResult[Any]:
        """Copy messages into a new value result with no value set."""
        from .combinators import to_value_result
        return to_value_result(self)

    def convert_to(self, target: type[R]) -> R:
        """Copy messages into a new result of the target shape."""
        from .combinators import convert_to
        return convert_to(self, target)

    def on_success(self, action: Callable[[Self], object]) -> Self:
        """Call action(self) if succeeded; return self."""
        from .combinators import on_success
        return on_success(self, action)

    def on_failure(self, action: Callable[[Self], object]) -> Self:
        """Call action(self) if not succeeded; return self."""
        from .combinators import on_failure
        return on_failure(self, action)

    def on(
        self,
        success: Callable[[Self], object] | None = None,
        failure: Callable[[Self], object] | None = None,
    ) -> Self:
        """Call whichever of success/failure matches the outcome; return self."""
        from .combinators import on
        return on(self, success=success, failure=failure)


class ValueResult(OperationResult, Generic[T]):
    """Operation result that may also carry a value.

    The value is independent of success: a successful result may have no
    value and a failed one may still carry a partial value.
    """

    __slots__ = ("_value",)

    def __init__(self) -> None:
        super().__init__()
        self._value: T | None = None

    @property
    def value(self) -> T | None:
        return self._value

    @value.setter
    def value(self, value: T | None) -> None:
        self._value = value

    def has_value(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"ValueResult(succeeded={self.succeeded}, value={self._value!r}, messages={list(self._messages)!r})"

    @classmethod
    def success(cls, value: T | None = None) -> Self:  # type: ignore[override]
        """Successful result with no messages, carrying value if given."""
        result = cls()
        result._value = value
        return result

    @classmethod
    def failure(cls, *items: Any, severity: Severity | None = None) -> Self:  # type: ignore[override]
        """Same as OperationResult.failure, but an empty message list is accepted.

        With settings.strict_value_failure enabled, an empty list is rejected
        as it is for OperationResult.failure.
        """
        if not items and severity is not None:
            raise ArgumentError("severity", "only valid with a problem-details payload")
        messages = _failure_messages(items, severity) if items else []
        if not messages and get_settings().strict_value_failure:
            raise ArgumentError.empty("messages")
        result = cls()
        result._messages.extend(messages)
        return result
