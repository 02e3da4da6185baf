"""Protocols for OAuth domain dependencies."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class SignatureMethod(Protocol):
    """Turns a signature base string plus key material into a signature value."""

    @property
    def name(self) -> str:
        """Value sent as ``oauth_signature_method``."""
        ...

    def sign(
        self,
        base_string: str,
        consumer_secret: Optional[str] = None,
        token_secret: Optional[str] = None,
    ) -> str:
        """Return the base64 encoded signature of ``base_string``."""
        ...
