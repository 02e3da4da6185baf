"""Transport adapters."""

from vatsim_sso.adapters.transport.fake import FakeTransport
from vatsim_sso.adapters.transport.httpx_transport import HttpxTransport

__all__ = ["FakeTransport", "HttpxTransport"]
