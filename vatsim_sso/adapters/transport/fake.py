"""Fake transport for testing.

Returns seeded bodies without any network access and records every call.
"""

from typing import NamedTuple, Optional, Union

from vatsim_sso.core.exceptions import TransportError


class TransportCall(NamedTuple):
    url: str
    body: str
    timeout: float


class FakeTransport:
    """Test implementation of Transport.

    Responses are consumed in order; the last one is reused once the queue
    drains. A seeded exception is raised instead of returning a body.

    Usage:
        fake = FakeTransport()
        fake.seed('{"request": {"result": "success"}}')
        session = HandshakeSession(settings, transport=fake)
        ...
        assert fake.call_count == 1
        assert "oauth_verifier=V1" in fake.calls[0].body
    """

    def __init__(self, *responses: Union[str, Exception]) -> None:
        self._responses: list[Union[str, Exception]] = list(responses)
        self._last: Optional[Union[str, Exception]] = None
        self.calls: list[TransportCall] = []

    def seed(self, *responses: Union[str, Exception]) -> None:
        """Queue response bodies (or exceptions to raise)."""
        self._responses.extend(responses)

    def set_error(self, message: str = "Connection refused", code: Optional[int] = 7) -> None:
        """Queue a TransportError."""
        self._responses.append(TransportError(message, code=code))

    def post(self, url: str, body: str, timeout: float) -> str:
        self.calls.append(TransportCall(url, body, timeout))
        if self._responses:
            self._last = self._responses.pop(0)
        elif self._last is None:
            raise AssertionError(f"FakeTransport has no seeded response for {url}")

        response = self._last
        if isinstance(response, Exception):
            raise response
        return response

    # Test helpers

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> Optional[TransportCall]:
        return self.calls[-1] if self.calls else None

    def clear(self) -> None:
        self._responses.clear()
        self._last = None
        self.calls.clear()
