"""Free functions over results: shape conversion and outcome continuations.

Conversions always build a fresh result whose collection is an independent
copy of the source's messages (same order, no dedup). Values are never
carried across: a converted value result starts with no value.

Continuations are side-effect hooks. They never touch messages, success or
value, and return the same result instance to allow chaining:

    >>> from opresults import OperationResult
    >>> log = []
    >>> result = (
    ...     OperationResult.success()
    ...     .on_success(lambda r: log.append("ok"))
    ...     .on_failure(lambda r: log.append("failed"))
    ... )
    >>> log
    ['ok']
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, get_origin

from .errors import ArgumentError, require
from .result import OperationResult, ValueResult

if TYPE_CHECKING:
    from collections.abc import Iterable

P = ParamSpec("P")
T = TypeVar("T")
R = TypeVar("R", bound=OperationResult)


# ═══════════════════════════════════════════════════════════════════════════════
# Conversion
# ═══════════════════════════════════════════════════════════════════════════════


def _copy_messages(source: OperationResult, target: R) -> R:
    target.messages.extend(source.messages)
    return target


def to_result(result: OperationResult) -> OperationResult:
    """New non-value result carrying a copy of result's messages."""
    require(result, "result")
    return _copy_messages(result, OperationResult())


def to_value_result(result: OperationResult) -> ValueResult[Any]:
    """New value result (no value set) carrying a copy of result's messages."""
    require(result, "result")
    return _copy_messages(result, ValueResult())


def convert_to(result: OperationResult, target: type[R]) -> R:
    """New result of shape target carrying a copy of result's messages.

    target may be OperationResult, ValueResult, a parametrised ValueResult[T]
    or any subclass of them.

    Raises:
        ArgumentError: If result is None or target is not a result type
    """
    require(result, "result")
    require(target, "target")
    cls = get_origin(target) or target
    if not (isinstance(cls, type) and issubclass(cls, OperationResult)):
        raise ArgumentError("target", f"expected an OperationResult type, got {target!r}")
    return _copy_messages(result, cls())


def merge(*results: OperationResult) -> OperationResult:
    """New non-value result holding every message of every result, in order."""
    merged = OperationResult()
    for result in results:
        require(result, "results")
        merged.messages.extend(result.messages)
    return merged


# ═══════════════════════════════════════════════════════════════════════════════
# Continuations
# ═══════════════════════════════════════════════════════════════════════════════


def on_success(result: R, action: Callable[[R], object]) -> R:
    """Invoke action(result) iff result succeeded; return result.

    Raises:
        ArgumentError: If result is None
    """
    require(result, "result")
    if result.succeeded:
        action(result)
    return result


def on_failure(result: R, action: Callable[[R], object]) -> R:
    """Invoke action(result) iff result did not succeed; return result.

    Raises:
        ArgumentError: If result is None
    """
    require(result, "result")
    if not result.succeeded:
        action(result)
    return result


def on(
    result: R,
    success: Callable[[R], object] | None = None,
    failure: Callable[[R], object] | None = None,
) -> R:
    """Apply on_success/on_failure for whichever actions are given."""
    require(result, "result")
    if success is not None:
        result = on_success(result, success)
    if failure is not None:
        result = on_failure(result, failure)
    return result


# ═══════════════════════════════════════════════════════════════════════════════
# Exception capture
# ═══════════════════════════════════════════════════════════════════════════════


def try_operation(fn: Callable[P, object], *args: P.args, **kwargs: P.kwargs) -> OperationResult:
    """Call fn, returning success, or a failure wrapping any Exception it raised."""
    try:
        fn(*args, **kwargs)
    except Exception as e:
        return OperationResult.failure(e)
    return OperationResult.success()


def try_value(fn: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> ValueResult[T]:
    """Call fn, returning its value as a success, or a failure wrapping any Exception it raised."""
    try:
        value = fn(*args, **kwargs)
    except Exception as e:
        return ValueResult.failure(e)
    return ValueResult.success(value)


def collect_values(results: Iterable[ValueResult[T]]) -> ValueResult[list[T | None]]:
    """Gather values of several value results into one, keeping all their messages."""
    collected: ValueResult[list[T | None]] = ValueResult()
    values: list[T | None] = []
    for result in results:
        require(result, "results")
        collected.messages.extend(result.messages)
        values.append(result.value)
    collected.value = values
    return collected
