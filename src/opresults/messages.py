"""Severity-tagged messages carried by operation results.

A Message is an immutable ``{severity, details}`` pair. Messages come in a
closed set of kinds sharing that shape:

- PLAIN: built from explicit details or by reflecting an object's members
- EXCEPTION: wraps a caught exception, severity is always ERROR
- PROBLEM_DETAILS: wraps an RFC 7807 problem-details payload
"""

from __future__ import annotations

import dataclasses
import traceback
from collections.abc import Iterable, Iterator, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Annotated, Any, Final, Self

from pydantic import BaseModel, ConfigDict, Field

from .errors import ArgumentError, require
from .settings import get_settings


class Severity(StrEnum):
    """Categorical message tag. Compared by equality only, never ranked."""
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"


class MessageKind(StrEnum):
    """What a message was built from."""
    PLAIN = "plain"
    EXCEPTION = "exception"
    PROBLEM_DETAILS = "problem_details"


class ProblemDetails(BaseModel):
    """RFC 7807 problem-details payload.

    Unknown members are kept as extensions and end up in message details
    after the standard fields.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        str_strip_whitespace=True,
        json_schema_extra={
            "title": "Problem Details",
            "examples": [{
                "type": "https://example.com/probs/out-of-credit",
                "title": "You do not have enough credit.",
                "status": 403,
                "detail": "Your current balance is 30, but that costs 50.",
                "instance": "/account/12345/msgs/abc",
            }],
        },
    )

    type: str = Field(default="about:blank", description="URI reference identifying the problem type")
    title: str | None = Field(default=None, description="Short human-readable summary")
    status: Annotated[int, Field(ge=100, le=599)] | None = Field(default=None, description="HTTP status code")
    detail: str | None = Field(default=None, description="Explanation specific to this occurrence")
    instance: str | None = Field(default=None, description="URI reference identifying this occurrence")


_UNSET: Final = object()

# Detail keys owned by exception messages
EXCEPTION_KEYS: Final = frozenset({"message", "exception_type", "traceback"})


def _public(name: str) -> bool:
    return not name.startswith("_")


def _properties(cls: type) -> Iterator[str]:
    """Public property names declared on cls and its bases, base classes first."""
    seen: set[str] = set()
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and _public(name) and name not in seen:
                seen.add(name)
                yield name


def _class_attributes(cls: type) -> Iterator[str]:
    """Public plain-data class attributes of cls and its bases, base classes first."""
    seen: set[str] = set()
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if _public(name) and name not in seen and not callable(attr) and not hasattr(attr, "__get__"):
                seen.add(name)
                yield name


def _members(source: object) -> Iterator[tuple[str, Any]]:
    """Enumerate (name, value) for every readable public member of source, by shape."""
    if isinstance(source, Mapping):
        for key, value in source.items():
            yield str(key), value
        return

    if isinstance(source, BaseModel):
        model = type(source)
        for name in (*model.model_fields, *model.model_computed_fields):
            if _public(name):
                yield name, getattr(source, name)
        return

    if isinstance(source, tuple) and hasattr(source, "_fields"):  # namedtuple
        yield from zip(source._fields, source)
        return

    seen: set[str] = set()
    if dataclasses.is_dataclass(source) and not isinstance(source, type):
        names: Iterable[str] = (f.name for f in dataclasses.fields(source))
    elif hasattr(source, "__dict__"):
        names = list(vars(source))
    else:
        names = [s for k in type(source).__mro__ for s in getattr(k, "__slots__", ()) if hasattr(source, s)]

    for name in names:
        if _public(name) and name not in seen:
            seen.add(name)
            yield name, getattr(source, name)
    for name in _class_attributes(type(source)):
        if name not in seen:
            seen.add(name)
            yield name, getattr(source, name)
    for name in _properties(type(source)):
        if name not in seen:
            seen.add(name)
            yield name, getattr(source, name)


class Message:
    """Immutable severity + details pair.

    Examples:
        >>> Message(Severity.INFORMATION).details
        mappingproxy({})

        >>> Message(Severity.WARNING, {"field": "email"}).details["field"]
        'email'

        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Hint:
        ...     SomeProp: str
        ...     Nil: None = None
        >>> dict(Message.from_object(Severity.INFORMATION, Hint("x"), ignore_null=True).details)
        {'SomeProp': 'x'}

    Notes:
        - The details mapping passed in is stored as-is and exposed read-only
        - Equality compares kind, severity and details
    """

    __slots__ = ("_severity", "_details", "_kind", "_source")

    def __init__(self, severity: Severity, details: Mapping[str, Any] = _UNSET) -> None:  # type: ignore[assignment]
        if details is _UNSET:
            details = {}
        require(details, "details")
        self._severity = severity
        self._details = details
        self._kind = MessageKind.PLAIN
        self._source: BaseException | ProblemDetails | None = None

    @classmethod
    def _build(cls, severity: Severity, details: Mapping[str, Any], kind: MessageKind, source: object) -> Self:
        msg = cls(severity, details)
        msg._kind = kind
        msg._source = source  # type: ignore[assignment]
        return msg

    # ─────────────────────────────────────────────────────────────────
    # Alternate constructors
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def from_object(cls, severity: Severity, source: object, *, ignore_null: bool = False) -> Self:
        """Build details from the public members of any structured object.

        Mappings, dataclasses, pydantic models, named tuples and plain
        objects (instance attributes, class attributes, properties) are
        handled alike. With ignore_null, members whose value is None are
        skipped instead of stored as None.

        Raises:
            ArgumentError: If source is None
        """
        require(source, "source")
        details = {k: v for k, v in _members(source) if not (ignore_null and v is None)}
        return cls(severity, details)

    @classmethod
    def from_pairs(cls, severity: Severity, pairs: Iterable[tuple[str, Any]]) -> Self:
        """Build details from an explicit ordered key/value sequence."""
        require(pairs, "pairs")
        return cls(severity, dict(pairs))

    @classmethod
    def from_exception(
        cls,
        exception: BaseException,
        properties: Mapping[str, str] | None = None,
        metrics: Mapping[str, float] | None = None,
    ) -> Self:
        """Wrap a caught exception as an ERROR message.

        Details hold ``message`` and ``exception_type``, a ``traceback`` when
        enabled in settings, then any extra properties and metrics. Extra keys
        that collide with those three are stored as ``extra_<key>``.
        """
        require(exception, "exception")
        details: dict[str, Any] = {
            "message": str(exception),
            "exception_type": type(exception).__name__,
        }
        if exception.__traceback__ is not None and get_settings().include_traceback:
            details["traceback"] = "".join(traceback.format_exception(exception))
        for key, value in (*(properties or {}).items(), *(metrics or {}).items()):
            details[f"extra_{key}" if key in EXCEPTION_KEYS else key] = value
        return cls._build(Severity.ERROR, details, MessageKind.EXCEPTION, exception)

    @classmethod
    def from_problem_details(
        cls,
        problem: ProblemDetails | Mapping[str, Any],
        severity: Severity = Severity.ERROR,
    ) -> Self:
        """Wrap a problem-details payload; mappings are validated into ProblemDetails first."""
        require(problem, "problem")
        if not isinstance(problem, ProblemDetails):
            problem = ProblemDetails.model_validate(problem)
        return cls._build(severity, problem.model_dump(exclude_none=True), MessageKind.PROBLEM_DETAILS, problem)

    # ─────────────────────────────────────────────────────────────────
    # Accessors
    # ─────────────────────────────────────────────────────────────────

    @property
    def severity(self) -> Severity:
        return self._severity

    @property
    def details(self) -> Mapping[str, Any]:
        """Read-only view over the details mapping."""
        return MappingProxyType(self._details)  # type: ignore[arg-type]

    @property
    def kind(self) -> MessageKind:
        return self._kind

    @property
    def source(self) -> BaseException | ProblemDetails | None:
        """Exception or ProblemDetails this message wraps, None for plain messages."""
        return self._source

    @property
    def exception(self) -> BaseException | None:
        return self._source if self._kind is MessageKind.EXCEPTION else None  # type: ignore[return-value]

    @property
    def problem(self) -> ProblemDetails | None:
        return self._source if self._kind is MessageKind.PROBLEM_DETAILS else None  # type: ignore[return-value]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return (
            self._kind is other._kind
            and self._severity == other._severity
            and dict(self._details) == dict(other._details)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Message({self._severity.value}, kind={self._kind.value}, details={dict(self._details)!r})"
