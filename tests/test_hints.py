from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from types import SimpleNamespace
from typing import Any

import pytest

from linear_lab import hints
from linear_lab.config import Settings
from linear_lab.constants import FALLBACK_HINT, FALLBACK_HINTS
from linear_lab.errors import HintProviderFailure, HintProviderUnavailable
from linear_lab.hints import (
    AgentHintProvider,
    HintBroker,
    HintRequest,
    PendingHint,
    build_hint_prompt,
    fetch_hint,
)
from linear_lab.models import GameRound


@pytest.fixture
def request_(sample_round: GameRound) -> HintRequest:
    return HintRequest.from_round(sample_round, 1, 1)


def test_no_provider_uses_fallback(request_: HintRequest) -> None:
    assert fetch_hint(None, request_) == FALLBACK_HINT
    assert fetch_hint(None, request_, locale="vi") == FALLBACK_HINTS["vi"]


def test_provider_failure_is_logged_and_replaced(
    request_: HintRequest, caplog: pytest.LogCaptureFixture
) -> None:
    def boom(request: HintRequest) -> str:
        raise RuntimeError("network down")

    with caplog.at_level(logging.WARNING, logger="linear_lab.hints"):
        assert fetch_hint(boom, request_) == FALLBACK_HINT
    assert "network down" in caplog.text


def test_unavailable_provider_is_replaced(request_: HintRequest) -> None:
    def missing(request: HintRequest) -> str:
        raise HintProviderUnavailable("no key")

    assert fetch_hint(missing, request_) == FALLBACK_HINT


def test_blank_provider_reply_is_replaced(request_: HintRequest) -> None:
    assert fetch_hint(lambda r: "   ", request_) == FALLBACK_HINT


def test_slow_provider_times_out(request_: HintRequest) -> None:
    release = threading.Event()

    def slow(request: HintRequest) -> str:
        release.wait(5)
        return "Hint: too late"

    try:
        assert fetch_hint(slow, request_, timeout=0.05) == FALLBACK_HINT
    finally:
        release.set()


def test_prompt_mentions_functions_and_points(request_: HintRequest) -> None:
    prompt = build_hint_prompt(request_)
    assert "y = 2x + 1" in prompt
    assert "y = x + 1" in prompt
    assert "(-1, -1)" in prompt and "(1, 3)" in prompt
    assert "English" in prompt
    assert "Vietnamese" in build_hint_prompt(request_, "vi")


def test_agent_provider_without_key_is_unavailable(request_: HintRequest) -> None:
    with pytest.raises(HintProviderUnavailable):
        AgentHintProvider(None)(request_)


def test_agent_provider_runs_hint_agent(
    monkeypatch: pytest.MonkeyPatch, request_: HintRequest
) -> None:
    calls: list[dict[str, Any]] = []

    def fake_run_sync(agent: Any, input: Any, api_key: str | None = None) -> SimpleNamespace:
        calls.append({"agent": agent, "input": input, "api_key": api_key})
        return SimpleNamespace(final_output="  Hint: find the rise between the two points.  ")

    monkeypatch.setattr(hints.Runner, "run_sync", fake_run_sync)
    provider = AgentHintProvider.from_settings(
        Settings(openai_api_key="sk-test", hint_model="tiny-model")
    )
    assert provider(request_) == "Hint: find the rise between the two points."
    (call,) = calls
    assert call["agent"].name == "HintAgent"
    assert call["agent"].model == "tiny-model"
    assert call["api_key"] == "sk-test"
    assert "y = 2x + 1" in call["input"]


def test_agent_provider_wraps_errors(monkeypatch: pytest.MonkeyPatch, request_: HintRequest) -> None:
    def fail(agent: Any, input: Any, api_key: str | None = None) -> Any:
        raise RuntimeError("rate limited")

    monkeypatch.setattr(hints.Runner, "run_sync", fail)
    with pytest.raises(HintProviderFailure, match="rate limited"):
        AgentHintProvider("sk-test")(request_)

    monkeypatch.setattr(
        hints.Runner, "run_sync", lambda agent, input, api_key=None: SimpleNamespace(final_output="")
    )
    with pytest.raises(HintProviderFailure, match="empty"):
        AgentHintProvider("sk-test")(request_)


def test_broker_without_provider_resolves_immediately(request_: HintRequest) -> None:
    broker = HintBroker(None, locale="vi")
    pending = broker.submit(3, request_)
    assert pending.done()
    assert pending.tag == 3
    assert pending.result() == FALLBACK_HINTS["vi"]


def test_broker_runs_provider_in_background(request_: HintRequest) -> None:
    release = threading.Event()

    def provider(request: HintRequest) -> str:
        release.wait(5)
        return "Hint: look at x = 0."

    broker = HintBroker(provider, timeout=5)
    try:
        pending = broker.submit(1, request_)
        assert not pending.done()
        release.set()
        assert pending.result() == "Hint: look at x = 0."
    finally:
        release.set()
        broker.shutdown()


def test_broker_result_falls_back_on_error(request_: HintRequest) -> None:
    def provider(request: HintRequest) -> str:
        raise HintProviderFailure("bad")

    broker = HintBroker(provider)
    try:
        assert broker.submit(1, request_).result() == FALLBACK_HINT
    finally:
        broker.shutdown()


def test_pending_hint_deadline_counts_from_submission() -> None:
    never: Future[str] = Future()
    pending = PendingHint(1, never, FALLBACK_HINT, timeout=0.2)
    time.sleep(0.3)
    assert pending.remaining() == 0.0
    started = time.monotonic()
    assert pending.result() == FALLBACK_HINT
    assert time.monotonic() - started < 0.15


def test_pending_hint_without_timeout_has_no_deadline() -> None:
    done: Future[str] = Future()
    done.set_result("Hint: ok")
    pending = PendingHint(1, done, FALLBACK_HINT, timeout=None)
    assert pending.deadline is None
    assert pending.result() == "Hint: ok"
