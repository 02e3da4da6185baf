"""Unit tests for HttpxTransport and FakeTransport.

HttpxTransport runs against httpx.MockTransport, so no network is touched.
"""

from dataclasses import dataclass
from typing import Optional

import httpx
import pytest

from vatsim_sso.adapters.transport.fake import FakeTransport
from vatsim_sso.adapters.transport.httpx_transport import USER_AGENT, HttpxTransport
from vatsim_sso.core.exceptions import ErrorKind, TransportError
from vatsim_sso.core.protocols.transport import Transport

URL = "https://sso.example.net/sso/api/login_token/json/"
BODY = "oauth_callback=https%3A%2F%2Fapp.example%2Fcb&oauth_consumer_key=abc"


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(transport=httpx.MockTransport(handler))


# ===========================================================================
# HttpxTransport
# ===========================================================================


def test_httpx_transport_satisfies_protocol():
    assert isinstance(HttpxTransport(), Transport)
    assert isinstance(FakeTransport(), Transport)


def test_post_sends_form_body_and_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode()
        seen["headers"] = request.headers
        return httpx.Response(200, text='{"request": {"result": "success"}}')

    text = _transport(handler).post(URL, BODY, timeout=5)

    assert text == '{"request": {"result": "success"}}'
    assert seen["method"] == "POST"
    assert seen["url"] == URL
    assert seen["body"] == BODY
    assert seen["headers"]["content-type"] == "application/x-www-form-urlencoded"
    assert seen["headers"]["user-agent"] == USER_AGENT


def test_error_status_with_body_is_returned():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text='{"request": {"result": "fail", "message": "nope"}}')

    assert "nope" in _transport(handler).post(URL, BODY, timeout=5)


@dataclass
class FailureCase:
    desc: str
    exception: Optional[Exception]
    status: int = 200
    expect_match: str = ""
    expect_code: Optional[int] = None


FAILURE_CASES = [
    FailureCase("connect error", httpx.ConnectError("Connection refused"), expect_match="failed"),
    FailureCase("read timeout", httpx.ReadTimeout("timed out"), expect_match="timed out after 5s"),
    FailureCase("empty body", None, status=200, expect_match="Empty response", expect_code=200),
    FailureCase("empty 502", None, status=502, expect_match="HTTP 502", expect_code=502),
]


@pytest.mark.parametrize("case", FAILURE_CASES, ids=lambda c: c.desc)
def test_post_failures_raise_transport_error(case: FailureCase):
    def handler(request: httpx.Request) -> httpx.Response:
        if case.exception is not None:
            raise case.exception
        return httpx.Response(case.status, content=b"")

    with pytest.raises(TransportError, match=case.expect_match) as exc_info:
        _transport(handler).post(URL, BODY, timeout=5)

    assert exc_info.value.kind == ErrorKind.TRANSPORT
    assert exc_info.value.code == case.expect_code


# ===========================================================================
# FakeTransport
# ===========================================================================


def test_fake_returns_responses_in_order_and_reuses_last():
    fake = FakeTransport("first", "second")

    assert fake.post(URL, "a", 1) == "first"
    assert fake.post(URL, "b", 1) == "second"
    assert fake.post(URL, "c", 1) == "second"
    assert fake.call_count == 3
    assert fake.last_call.body == "c"


def test_fake_seed_after_drain():
    fake = FakeTransport("first")
    fake.post(URL, "a", 1)
    fake.seed("second")

    assert fake.post(URL, "b", 1) == "second"


def test_fake_set_error():
    fake = FakeTransport()
    fake.set_error()

    with pytest.raises(TransportError) as exc_info:
        fake.post(URL, BODY, 1)
    assert exc_info.value.code == 7


def test_fake_without_responses_fails_loudly():
    fake = FakeTransport()

    with pytest.raises(AssertionError):
        fake.post(URL, BODY, 1)


def test_fake_clear():
    fake = FakeTransport("x")
    fake.post(URL, BODY, 1)
    fake.clear()

    assert fake.call_count == 0
    assert fake.last_call is None
    with pytest.raises(AssertionError):
        fake.post(URL, BODY, 1)
