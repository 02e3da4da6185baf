"""Configuration enums for type-safe settings.

These enums provide type safety and IDE autocomplete for configuration values.
They inherit from str to maintain JSON serialization compatibility.
"""

from enum import Enum
from typing import Optional


class WireFormat(str, Enum):
    """Response body formats the provider can answer in.

    The value is also the trailing path segment of every API URL.
    """

    JSON = "json"
    XML = "xml"

    @classmethod
    def parse(cls, value: str) -> Optional["WireFormat"]:
        """Case-insensitive lookup. Returns None for unknown values."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class SignatureAlgorithm(str, Enum):
    """Signature methods understood by the provider.

    The value is sent as ``oauth_signature_method``.
    """

    HMAC_SHA1 = "HMAC-SHA1"
    RSA_SHA1 = "RSA-SHA1"

    @classmethod
    def from_name(cls, name: str) -> Optional["SignatureAlgorithm"]:
        """Map a user-facing name (``hmac``, ``HMAC-SHA1``, ``rsa_sha1``...) to a member."""
        if not isinstance(name, str):
            return None
        normalized = name.strip().upper().replace("_", "-")
        if normalized in ("HMAC", "HMAC-SHA1"):
            return cls.HMAC_SHA1
        if normalized in ("RSA", "RSA-SHA1"):
            return cls.RSA_SHA1
        return None
