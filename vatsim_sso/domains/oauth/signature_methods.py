"""Signature methods.

Two variants behind the SignatureMethod protocol:

- SharedSecretSignature (HMAC-SHA1): keyed by the consumer and token secrets.
- PrivateKeySignature (RSA-SHA1): PKCS#1 v1.5 over SHA-1 with the consumer's
  RSA private key; secrets are ignored.

``select_signature_method`` maps a configured name to a variant. Selection
happens once at configuration time, never at sign time.
"""

import base64
import hashlib
import hmac
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from vatsim_sso.core.config.enums import SignatureAlgorithm
from vatsim_sso.core.exceptions import SignatureConfigurationError
from vatsim_sso.domains.oauth.canonical import percent_encode
from vatsim_sso.domains.oauth.protocols import SignatureMethod

PrivateKey = Union[str, bytes, rsa.RSAPrivateKey]


class SharedSecretSignature(SignatureMethod):
    """HMAC-SHA1 signing.

    Signing key: percent_encode(consumer_secret)&percent_encode(token_secret)
    """

    algorithm = SignatureAlgorithm.HMAC_SHA1

    @property
    def name(self) -> str:
        return self.algorithm.value

    def sign(
        self,
        base_string: str,
        consumer_secret: Optional[str] = None,
        token_secret: Optional[str] = None,
    ) -> str:
        if not consumer_secret:
            raise SignatureConfigurationError("HMAC-SHA1 signing requires a consumer secret")

        key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret or '')}"
        digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
        return base64.b64encode(digest).decode("utf-8")

    def __repr__(self) -> str:
        return "SharedSecretSignature()"


class PrivateKeySignature(SignatureMethod):
    """RSA-SHA1 signing with a private key loaded at construction time."""

    algorithm = SignatureAlgorithm.RSA_SHA1

    def __init__(self, private_key: Optional[PrivateKey]) -> None:
        """Load the key.

        Args:
            private_key: PEM text, PEM bytes, or a loaded RSA private key.

        Raises:
            SignatureConfigurationError: If the key is missing or not an RSA private key.
        """
        self._key = self._load_key(private_key)

    @property
    def name(self) -> str:
        return self.algorithm.value

    @staticmethod
    def _load_key(private_key: Optional[PrivateKey]) -> rsa.RSAPrivateKey:
        if not private_key:
            raise SignatureConfigurationError("RSA-SHA1 signing requires a private key")
        if isinstance(private_key, rsa.RSAPrivateKey):
            return private_key

        pem = private_key.encode("utf-8") if isinstance(private_key, str) else private_key
        try:
            key = serialization.load_pem_private_key(pem, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SignatureConfigurationError(f"Unable to load RSA private key: {e}") from e

        if not isinstance(key, rsa.RSAPrivateKey):
            raise SignatureConfigurationError("Private key is not an RSA key")
        return key

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self._key.public_key()

    def sign(
        self,
        base_string: str,
        consumer_secret: Optional[str] = None,
        token_secret: Optional[str] = None,
    ) -> str:
        signature = self._key.sign(base_string.encode("utf-8"), padding.PKCS1v15(), hashes.SHA1())
        return base64.b64encode(signature).decode("utf-8")

    def __repr__(self) -> str:
        return f"PrivateKeySignature(key_size={self._key.key_size})"


def select_signature_method(
    name: str, private_key: Optional[PrivateKey] = None
) -> SignatureMethod:
    """Build the signature method registered under ``name`` (case-insensitive).

    Raises:
        SignatureConfigurationError: For unknown names or an unusable RSA key.
    """
    algorithm = SignatureAlgorithm.from_name(name or "")
    if algorithm == SignatureAlgorithm.HMAC_SHA1:
        return SharedSecretSignature()
    if algorithm == SignatureAlgorithm.RSA_SHA1:
        return PrivateKeySignature(private_key)
    raise SignatureConfigurationError(
        f"Unknown signature method '{name}'. Valid methods: HMAC, HMAC-SHA1, RSA, RSA-SHA1"
    )
