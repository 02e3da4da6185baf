"""Shared exceptions module.

Every error raised inside the handshake carries an ``ErrorKind``. The session
turns caught exceptions into an ``ErrorRecord`` and a failed result, so none of
these reach the caller of a handshake operation (except ``ConfigurationError``
from the format setter).
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure categories reported by a handshake session."""

    TRANSPORT = "transport"
    DECODE = "decode"
    PROVIDER_REJECTED = "provider_rejected"
    PROTOCOL_MISMATCH = "protocol_mismatch"
    CONFIGURATION = "configuration"


class SsoException(Exception):
    """Base exception for vatsim_sso."""

    kind: ErrorKind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        """Create a new SsoException instance.

        Args:
        ----
            message (str): Human readable description.
            code (int, optional): Transport or provider error code, if any.

        """
        self.message = message
        self.code = code
        super().__init__(message)


class TransportError(SsoException):
    """Raised when the provider could not be reached or returned nothing."""

    kind = ErrorKind.TRANSPORT


class ResponseDecodeError(SsoException):
    """Raised when a response body cannot be parsed as the configured format."""

    kind = ErrorKind.DECODE


class ProviderRejectedError(SsoException):
    """Raised when the provider answers with a structured failure."""

    kind = ErrorKind.PROVIDER_REJECTED


class ProtocolMismatchError(SsoException):
    """Raised when the provider reports success without confirming the callback."""

    kind = ErrorKind.PROTOCOL_MISMATCH


class ConfigurationError(SsoException):
    """Raised for unusable configuration or calls made in the wrong state."""

    kind = ErrorKind.CONFIGURATION


class SignatureConfigurationError(ConfigurationError):
    """Raised when a signature method cannot be selected or used."""

    pass


class CanonicalizationError(ConfigurationError):
    """Raised when request parameters cannot be canonically encoded."""

    pass
