"""Tests for OperationResult / ValueResult and their factories."""

from __future__ import annotations

import pytest

from opresults import (
    ArgumentError,
    Message,
    MessageKind,
    OperationResult,
    ProblemDetails,
    Severity,
    ValueResult,
    clear_settings_cache,
)

ERROR = Message(Severity.ERROR, {"code": "E1"})
WARNING = Message(Severity.WARNING, {"code": "W1"})
INFO = Message(Severity.INFORMATION, {"code": "I1"})
PROBLEM = ProblemDetails(title="Conflict", status=409)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> object:
    monkeypatch.delenv("OPRESULTS_STRICT_VALUE_FAILURE", raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# ═════════════════════════════════════════════════════════════════════════════
# Derived state
# ═════════════════════════════════════════════════════════════════════════════


def test_error_and_warning_fails() -> None:
    result = OperationResult.failure(ERROR, WARNING)

    assert not result.succeeded
    assert result.messages.has_error()
    assert result.messages.has_warning()
    assert not result.messages.has_information()
    assert result.has_messages()


def test_warnings_and_information_do_not_fail() -> None:
    result = OperationResult.success()
    result.messages.extend([WARNING, INFO])

    assert result.succeeded
    assert result.has_messages()


def test_success_tracks_message_mutation() -> None:
    result = OperationResult.success()
    result.messages.append(ERROR)
    assert not result.succeeded
    result.messages.clear()
    assert result.succeeded


def test_messages_collection_is_never_replaced() -> None:
    result = OperationResult.success()
    with pytest.raises(AttributeError):
        result.messages = []  # type: ignore[misc, assignment]


# ═════════════════════════════════════════════════════════════════════════════
# Non-value factories
# ═════════════════════════════════════════════════════════════════════════════


def test_success_is_empty() -> None:
    result = OperationResult.success()
    assert result.succeeded
    assert not result.has_messages()
    assert len(result.messages) == 0


def test_failure_keeps_messages_in_order() -> None:
    result = OperationResult.failure(WARNING, ERROR, INFO)
    assert list(result.messages) == [WARNING, ERROR, INFO]
    assert not result.succeeded


def test_failure_without_messages_raises() -> None:
    with pytest.raises(ArgumentError) as exc_info:
        OperationResult.failure()
    assert exc_info.value.param_name == "messages"


def test_failure_with_none_raises() -> None:
    with pytest.raises(ArgumentError) as exc_info:
        OperationResult.failure(None)  # type: ignore[call-overload]
    assert exc_info.value.param_name == "messages"


def test_failure_accepts_a_list_of_messages() -> None:
    result = OperationResult.failure([WARNING, ERROR])

    assert list(result.messages) == [WARNING, ERROR]
    assert not result.succeeded
    assert result.messages.has_error()


def test_failure_with_empty_list_raises() -> None:
    with pytest.raises(ArgumentError) as exc_info:
        OperationResult.failure([])
    assert exc_info.value.param_name == "messages"


@pytest.mark.parametrize("items", [(["not a message"],), ("text",), (ERROR, 42)])
def test_failure_rejects_non_messages(items: tuple[object, ...]) -> None:
    with pytest.raises(ArgumentError) as exc_info:
        OperationResult.failure(*items)  # type: ignore[call-overload]
    assert exc_info.value.param_name == "messages"


def test_failure_from_problem_details_mapping() -> None:
    result = OperationResult.failure({"title": "Gone", "status": 410}, severity=Severity.WARNING)

    msg = result.messages[0]
    assert msg.kind is MessageKind.PROBLEM_DETAILS
    assert msg.severity is Severity.WARNING
    assert msg.details["status"] == 410


def test_failure_from_exception() -> None:
    exc = TimeoutError("upstream timed out")
    result = OperationResult.failure(exc)

    assert not result.succeeded
    assert len(result.messages) == 1
    msg = result.messages[0]
    assert msg.kind is MessageKind.EXCEPTION
    assert msg.exception is exc
    assert msg.details["message"] == "upstream timed out"


def test_failure_from_problem_details_defaults_to_error() -> None:
    result = OperationResult.failure(PROBLEM)

    assert not result.succeeded
    msg = result.messages[0]
    assert msg.kind is MessageKind.PROBLEM_DETAILS
    assert msg.severity is Severity.ERROR
    assert msg.details["status"] == 409


def test_failure_from_problem_details_with_severity() -> None:
    result = OperationResult.failure(PROBLEM, severity=Severity.WARNING)

    assert result.messages[0].severity is Severity.WARNING
    assert result.succeeded


def test_severity_without_problem_details_raises() -> None:
    with pytest.raises(ArgumentError) as exc_info:
        OperationResult.failure(ERROR, severity=Severity.WARNING)  # type: ignore[call-overload]
    assert exc_info.value.param_name == "severity"


# ═════════════════════════════════════════════════════════════════════════════
# Value factories
# ═════════════════════════════════════════════════════════════════════════════


def test_value_success_without_value() -> None:
    result: ValueResult[int] = ValueResult.success()

    assert result.succeeded
    assert not result.has_messages()
    assert not result.has_value()
    assert result.value is None


def test_value_success_with_value() -> None:
    result = ValueResult[str].success("ada")

    assert isinstance(result, ValueResult)
    assert result.succeeded
    assert result.has_value()
    assert result.value == "ada"


def test_falsy_value_still_counts() -> None:
    assert ValueResult.success(0).has_value()


def test_value_failure_keeps_messages() -> None:
    result: ValueResult[int] = ValueResult.failure(ERROR, INFO)

    assert not result.succeeded
    assert list(result.messages) == [ERROR, INFO]
    assert not result.has_value()


def test_value_failure_accepts_a_list_of_messages() -> None:
    result: ValueResult[int] = ValueResult.failure([INFO, ERROR])

    assert list(result.messages) == [INFO, ERROR]
    assert not result.succeeded


def test_value_failure_rejects_non_messages() -> None:
    with pytest.raises(ArgumentError):
        ValueResult.failure([ERROR, "oops"])


def test_value_failure_empty_list_accepted() -> None:
    assert ValueResult.failure([]).succeeded


def test_value_failure_accepts_empty_list() -> None:
    result: ValueResult[int] = ValueResult.failure()
    assert result.succeeded
    assert not result.has_messages()


def test_value_failure_empty_rejected_when_strict(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPRESULTS_STRICT_VALUE_FAILURE", "1")
    clear_settings_cache()
    with pytest.raises(ArgumentError):
        ValueResult.failure()


def test_value_failure_from_exception_and_problem() -> None:
    exc_result: ValueResult[int] = ValueResult.failure(KeyError("id"))
    problem_result: ValueResult[int] = ValueResult.failure(PROBLEM, severity=Severity.INFORMATION)

    assert exc_result.messages[0].kind is MessageKind.EXCEPTION
    assert not exc_result.succeeded
    assert problem_result.messages[0].severity is Severity.INFORMATION
    assert problem_result.succeeded


def test_failed_result_may_carry_partial_value() -> None:
    result: ValueResult[list[int]] = ValueResult.failure(ERROR)
    result.value = [1, 2]

    assert not result.succeeded
    assert result.has_value()


def test_value_result_is_an_operation_result() -> None:
    assert isinstance(ValueResult.success(1), OperationResult)
