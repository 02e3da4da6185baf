"""httpx-based transport.

Implements the Transport protocol with a short-lived httpx.Client per call.
"""

from typing import Optional

import httpx

from vatsim_sso.core.exceptions import TransportError
from vatsim_sso.core.logging import logger
from vatsim_sso.core.protocols.transport import Transport
from vatsim_sso.version import __version__

USER_AGENT = f"vatsim-sso/{__version__}"


class HttpxTransport(Transport):
    """POST form bodies to the provider.

    Any HTTP status is accepted as long as a body comes back: the provider
    reports failures inside the body, and the decoder decides what it means.
    An empty body is a transport failure.
    """

    def __init__(self, transport: Optional[httpx.BaseTransport] = None) -> None:
        """Initialize the transport.

        Args:
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        self._transport = transport
        self._logger = logger.with_prefix("[HttpxTransport] ")

    def post(self, url: str, body: str, timeout: float) -> str:
        """POST ``body`` to ``url`` and return the response text.

        Args:
            url: Target URL.
            body: application/x-www-form-urlencoded payload.
            timeout: Seconds before the request is abandoned.

        Returns:
            The response body.

        Raises:
            TransportError: If the provider is unreachable, times out, or returns no body.
        """
        headers = {
            "User-Agent": USER_AGENT,
            "Content-Type": "application/x-www-form-urlencoded",
        }
        self._logger.debug(f"POST {url}")

        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                response = client.post(url, content=body.encode("utf-8"), headers=headers)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {url} timed out after {timeout:g}s") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not response.content:
            raise TransportError(
                f"Empty response from {url} (HTTP {response.status_code})",
                code=response.status_code,
            )
        if response.is_error:
            self._logger.warning(f"Provider answered HTTP {response.status_code} for {url}")

        return response.text
