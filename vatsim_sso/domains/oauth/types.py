"""Value types for the OAuth domain.

These live in a separate module to avoid circular imports between
service implementations and protocol definitions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from vatsim_sso.core.exceptions import ErrorKind, SsoException


@dataclass(frozen=True, slots=True)
class Consumer:
    """The relying application's registered identity with the provider."""

    key: str
    secret: Optional[str] = None

    def __repr__(self) -> str:
        return f"Consumer(key={self.key!r}, secret={'***' if self.secret else None})"


@dataclass(frozen=True, slots=True)
class Token:
    """A provider-issued key/secret pair (request token)."""

    key: str
    secret: str

    def __repr__(self) -> str:
        return f"Token(key={self.key!r}, secret='***')"


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """A fully signed, ready-to-send POST."""

    method: str
    url: str
    body: str
    parameters: Dict[str, str]
    base_string: str
    signature: str


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """The most recent failure of a handshake session."""

    kind: ErrorKind
    message: str
    code: Optional[int] = None

    @classmethod
    def from_exception(cls, exc: SsoException) -> "ErrorRecord":
        return cls(kind=exc.kind, message=exc.message, code=exc.code)


@dataclass(frozen=True, slots=True)
class HandshakeResult:
    """Decoded, format-independent outcome of a handshake step.

    ``payload`` is the whole decoded response tree on success, e.g.
    ``payload["token"]["oauth_token"]`` or ``payload["user"]["id"]``.
    """

    success: bool
    payload: Optional[Dict[str, Any]] = None
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def failed(cls, error: ErrorRecord) -> "HandshakeResult":
        return cls(success=False, error_message=error.message, error_kind=error.kind)


class HandshakeState(str, Enum):
    """Lifecycle of a handshake session."""

    UNCONFIGURED = "unconfigured"
    READY = "ready"
    TOKEN_OBTAINED = "token_obtained"
    VERIFIED = "verified"
    FAILED = "failed"

