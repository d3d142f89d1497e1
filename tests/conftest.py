from __future__ import annotations

import io
import time
from collections.abc import Iterable
from types import SimpleNamespace
from typing import Any, Callable

import orjson
import pytest
import requests
from urllib3.exceptions import ProtocolError

from cryptomkt.adapter import CryptoMktAdapter
from cryptomkt.config import logger
from cryptomkt.rest_client import RestClient

BASE_URL = "https://api.test.cryptomkt/"
FROZEN_TIME = 1_500_000_000


class BrokenRaw:
    """A raw stream that dies mid-body."""

    def stream(self, chunk_size: int, decode_content: bool = True):
        raise ProtocolError("Connection broken: IncompleteRead")
        yield b""  # pragma: no cover

    def close(self) -> None:
        pass


def make_response(status: int = 200, body: Any = b"", reason: str | None = None) -> requests.Response:
    if isinstance(body, (dict, list)):
        body = orjson.dumps(body)
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason if reason is not None else ("OK" if status == 200 else "Error")
    resp.raw = io.BytesIO(body)
    return resp


def broken_response() -> requests.Response:
    resp = requests.Response()
    resp.status_code = 200
    resp.reason = "OK"
    resp.raw = BrokenRaw()
    return resp


class FakeSession(requests.Session):
    """requests.Session whose send() replays a script of responses and exceptions."""

    def __init__(self, outcomes: Iterable[Any] = ()) -> None:
        super().__init__()
        self.outcomes = list(outcomes)
        self.sent: list[requests.PreparedRequest] = []
        self.send_kwargs: list[dict[str, Any]] = []

    def queue(self, *outcomes: Any) -> None:
        self.outcomes.extend(outcomes)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.sent.append(request)
        self.send_kwargs.append(kwargs)
        if not self.outcomes:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def _quiet_logger(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logger, "enabled", False)


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> SimpleNamespace:
    """Stand-in for the `time` module as seen by the transport only."""
    fake = SimpleNamespace(time=time.time, sleeps=[])
    fake.sleep = fake.sleeps.append
    monkeypatch.setattr("cryptomkt.rest_client.time", fake)
    return fake


@pytest.fixture
def sleeps(clock: SimpleNamespace) -> list[float]:
    return clock.sleeps


@pytest.fixture
def frozen_time(clock: SimpleNamespace) -> int:
    clock.time = lambda: FROZEN_TIME + 0.75
    return FROZEN_TIME


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def rest(session: FakeSession, sleeps: list[float]) -> RestClient:
    return RestClient("my-key", "my-secret", base_url=BASE_URL, session=session)


@pytest.fixture
def client(rest: RestClient) -> CryptoMktAdapter:
    return CryptoMktAdapter(rest=rest)


@pytest.fixture
def respond(session: FakeSession) -> Callable[..., None]:
    def _respond(payload: Any, status: int = 200) -> None:
        session.queue(make_response(status, payload))

    return _respond
