"""Client for three-legged OAuth 1.0a single-sign-on handshakes (VATSIM SSO and similar)."""

from vatsim_sso.version import __version__
from vatsim_sso.core.config import SignatureAlgorithm, SsoSettings, WireFormat
from vatsim_sso.core.exceptions import ErrorKind, SsoException
from vatsim_sso.domains.oauth import (
    Consumer,
    ErrorRecord,
    HandshakeResult,
    HandshakeSession,
    HandshakeState,
    Token,
)

__all__ = [
    "__version__",
    "Consumer",
    "ErrorKind",
    "ErrorRecord",
    "HandshakeResult",
    "HandshakeSession",
    "HandshakeState",
    "SignatureAlgorithm",
    "SsoException",
    "SsoSettings",
    "Token",
    "WireFormat",
]
