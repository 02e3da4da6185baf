"""Transport protocol.

The session performs exactly one POST per handshake step through this
interface. Implementations live in vatsim_sso/adapters/transport/.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Send a form-encoded POST and return the response body."""

    def post(self, url: str, body: str, timeout: float) -> str:
        """POST ``body`` to ``url``.

        Raises:
            TransportError: On connection failure, timeout or an empty response.
        """
        ...
