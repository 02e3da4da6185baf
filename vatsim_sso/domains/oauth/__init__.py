"""OAuth 1.0a handshake domain: canonicalization, signing, decoding and session state."""

from vatsim_sso.domains.oauth.canonical import CanonicalRequestBuilder, percent_encode
from vatsim_sso.domains.oauth.decoder import ResponseDecoder
from vatsim_sso.domains.oauth.protocols import SignatureMethod
from vatsim_sso.domains.oauth.session import HandshakeSession
from vatsim_sso.domains.oauth.signature_methods import (
    PrivateKeySignature,
    SharedSecretSignature,
    select_signature_method,
)
from vatsim_sso.domains.oauth.signer import RequestSigner
from vatsim_sso.domains.oauth.types import (
    Consumer,
    ErrorRecord,
    HandshakeResult,
    HandshakeState,
    SignedRequest,
    Token,
)

__all__ = [
    "CanonicalRequestBuilder",
    "Consumer",
    "ErrorRecord",
    "HandshakeResult",
    "HandshakeSession",
    "HandshakeState",
    "PrivateKeySignature",
    "RequestSigner",
    "ResponseDecoder",
    "SharedSecretSignature",
    "SignatureMethod",
    "SignedRequest",
    "Token",
    "percent_encode",
    "select_signature_method",
]
