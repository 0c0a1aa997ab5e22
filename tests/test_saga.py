"""Tests for ordered multi-step execution."""

from __future__ import annotations

import pytest

from app.database.gateway import GatewayError
from app.modules.moderation.saga import PartialCompletionError, Saga


def _fail():
    raise GatewayError("update profiles", "boom")


def test_runs_steps_in_order() -> None:
    seen = []
    saga = Saga("demo").step("a", lambda: seen.append("a")).step("b", lambda: seen.append("b"))

    assert saga.execute() == ["a", "b"]
    assert seen == ["a", "b"]


def test_first_step_failure_is_plain_gateway_error() -> None:
    seen = []
    saga = Saga("demo").step("a", _fail).step("b", lambda: seen.append("b"))

    with pytest.raises(GatewayError):
        saga.execute()
    assert seen == []


def test_later_failure_reports_partial_completion() -> None:
    saga = Saga("demo").step("a", lambda: None).step("b", _fail).step("c", lambda: None)

    with pytest.raises(PartialCompletionError) as excinfo:
        saga.execute()

    assert excinfo.value.completed_steps == ["a"]
    assert excinfo.value.failed_step == "b"
    assert excinfo.value.cause.message == "boom"
