"""Request signing.

Merges the protocol parameters into the application parameters, signs the
canonical base string and serializes everything into a POST body.
"""

import secrets
import time
from typing import Callable, Dict, Mapping, Optional

from vatsim_sso.core.exceptions import SignatureConfigurationError
from vatsim_sso.domains.oauth.canonical import CanonicalRequestBuilder
from vatsim_sso.domains.oauth.protocols import SignatureMethod
from vatsim_sso.domains.oauth.types import Consumer, SignedRequest, Token

OAUTH_VERSION = "1.0"


def generate_nonce() -> str:
    """Generate a cryptographically secure random nonce."""
    return secrets.token_urlsafe(32)


def current_timestamp() -> str:
    """Get current Unix timestamp as string."""
    return str(int(time.time()))


class RequestSigner:
    """Produces signed requests for one signature method.

    Signing is deterministic for a given nonce and timestamp; inject
    ``nonce_factory`` and ``clock`` to pin them.
    """

    def __init__(
        self,
        signature_method: Optional[SignatureMethod],
        *,
        builder: Optional[CanonicalRequestBuilder] = None,
        nonce_factory: Callable[[], str] = generate_nonce,
        clock: Callable[[], str] = current_timestamp,
    ) -> None:
        if signature_method is None:
            raise SignatureConfigurationError("No signature method configured")
        self.signature_method = signature_method
        self.builder = builder or CanonicalRequestBuilder()
        self._nonce_factory = nonce_factory
        self._clock = clock

    def protocol_parameters(
        self, consumer: Consumer, token: Optional[Token]
    ) -> Dict[str, str]:
        """Reserved oauth_* parameters for a fresh request."""
        params = {
            "oauth_consumer_key": consumer.key,
            "oauth_nonce": self._nonce_factory(),
            "oauth_signature_method": self.signature_method.name,
            "oauth_timestamp": self._clock(),
            "oauth_version": OAUTH_VERSION,
        }
        if token is not None:
            params["oauth_token"] = token.key
        return params

    def signed_request(
        self,
        consumer: Consumer,
        token: Optional[Token],
        method: str,
        url: str,
        extra_params: Optional[Mapping[str, str]] = None,
    ) -> SignedRequest:
        """Build a signed request descriptor.

        Reserved protocol parameters take precedence over same-named entries
        in ``extra_params``.

        Args:
            consumer: The relying application's credentials.
            token: Request token, or None for the request-token step.
            method: HTTP method.
            url: Target URL.
            extra_params: Application parameters (callback, verifier, flags).

        Returns:
            SignedRequest with the encoded body including ``oauth_signature``.
        """
        params: Dict[str, str] = dict(extra_params or {})
        params.update(self.protocol_parameters(consumer, token))

        base_string = self.builder.base_string(method, url, params)
        signature = self.signature_method.sign(
            base_string,
            consumer.secret,
            token.secret if token is not None else None,
        )
        params["oauth_signature"] = signature

        return SignedRequest(
            method=method.upper(),
            url=url,
            body=self.builder.encode_body(params),
            parameters=params,
            base_string=base_string,
            signature=signature,
        )
