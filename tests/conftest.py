"""
Shared fixtures

Transport is faked by replacing the pooled session's ``send`` with a
scripted stub that answers with real ``requests.Response`` objects.
"""

import json
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from attendance_sdk.client.http_client import ClientDefaults, HttpClient


def make_response(
    status_code: int = 200,
    body: Any = None,
    text: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Build a real requests.Response with the given payload"""
    response = requests.Response()
    response.status_code = status_code
    if text is None:
        text = json.dumps(body) if body is not None else ""
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


Scripted = Union[requests.Response, Exception]


class FakeTransport:
    """
    Scripted replacement for requests.Session.send

    Routes are keyed by method and URL without query string. Each route
    answers with its queued responses in order and keeps repeating the
    last one.
    """

    def __init__(self) -> None:
        self._routes: Dict[Tuple[str, str], List[Scripted]] = {}
        self.requests: List[requests.PreparedRequest] = []

    def add(self, method: str, url: str, *responses: Scripted) -> "FakeTransport":
        self._routes.setdefault((method.upper(), url), []).extend(responses)
        return self

    def replace(self, method: str, url: str, *responses: Scripted) -> "FakeTransport":
        self._routes[(method.upper(), url)] = list(responses)
        return self

    def __call__(self, prepared: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.requests.append(prepared)
        parts = urlsplit(prepared.url)
        key = (prepared.method, f"{parts.scheme}://{parts.netloc}{parts.path}")
        queue = self._routes.get(key)
        if not queue:
            raise AssertionError(f"Unexpected request {key}")

        scripted = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(scripted, Exception):
            raise scripted
        return scripted

    def calls_to(self, url: str) -> List[requests.PreparedRequest]:
        return [
            r for r in self.requests
            if r.url == url or r.url.startswith(url + "?")
        ]


def query_of(prepared: requests.PreparedRequest) -> Dict[str, List[str]]:
    return parse_qs(urlsplit(prepared.url).query)


def attach(client: HttpClient, transport: FakeTransport) -> HttpClient:
    client._session.send = transport  # type: ignore[method-assign]
    return client


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client_factory(transport: FakeTransport):
    """HttpClient factory wiring every new client to the fake transport"""
    created: List[HttpClient] = []

    def factory(**kwargs: Any) -> HttpClient:
        client = attach(HttpClient(**kwargs), transport)
        created.append(client)
        return client

    factory.created = created  # type: ignore[attr-defined]
    return factory


@pytest.fixture
def make_client(transport: FakeTransport):
    def factory(
        base_url: Optional[str] = "https://x.test",
        headers: Optional[Dict[str, str]] = None,
        interceptors=(),
    ) -> HttpClient:
        return attach(
            HttpClient(
                ClientDefaults(base_url=base_url, headers=dict(headers or {})),
                interceptors=interceptors,
            ),
            transport,
        )

    return factory


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()
