"""Handshake session for the three-legged SSO login.

This session handles the OAuth 1.0a login flow against the provider:
1. request_token: obtain a request token (callback confirmed by the provider)
2. redirect_target: URL the host application redirects the user to
3. check_login: exchange the callback token + verifier for the user's identity

Reference: RFC 5849 - The OAuth 1.0 Protocol

Usage:
    session = HandshakeSession(SsoSettings(), transport=HttpxTransport())

    result = session.request_token("https://app.example/sso/callback")
    if not result:
        log(session.last_error)
    redirect_to(session.redirect_target())

    # on callback (token key/secret persisted by the host, verifier from the query string)
    identity = session.check_login(token_key, token_secret, oauth_verifier)
"""

from typing import Callable, Optional

from vatsim_sso.adapters.transport.httpx_transport import HttpxTransport
from vatsim_sso.core.config import SsoSettings, WireFormat
from vatsim_sso.core.exceptions import (
    ConfigurationError,
    ProtocolMismatchError,
    ProviderRejectedError,
    ResponseDecodeError,
    SignatureConfigurationError,
    SsoException,
)
from vatsim_sso.core.logging import logger
from vatsim_sso.core.protocols.transport import Transport
from vatsim_sso.domains.oauth.canonical import percent_encode
from vatsim_sso.domains.oauth.decoder import ResponseDecoder
from vatsim_sso.domains.oauth.protocols import SignatureMethod
from vatsim_sso.domains.oauth.signature_methods import PrivateKey, select_signature_method
from vatsim_sso.domains.oauth.signer import RequestSigner
from vatsim_sso.domains.oauth.types import (
    Consumer,
    ErrorRecord,
    HandshakeResult,
    HandshakeState,
    SignedRequest,
    Token,
)

SignerFactory = Callable[[SignatureMethod], RequestSigner]


def _flag(value: bool) -> str:
    # Pass-through flags; the provider defines their meaning.
    return "1" if value else ""


def _is_confirmed(value: object) -> bool:
    return str(value).strip().lower() == "true"


class HandshakeSession:
    """Stateful orchestrator for one login attempt.

    Holds the consumer credentials, the signature method, the response
    format, the outstanding request token and the last error. Not safe for
    concurrent use: serve one login attempt per instance.

    Handshake operations never raise. They return a HandshakeResult (falsy on
    failure) and record exactly one ErrorRecord in ``last_error``.
    """

    def __init__(
        self,
        settings: Optional[SsoSettings] = None,
        *,
        transport: Optional[Transport] = None,
        decoder: Optional[ResponseDecoder] = None,
        signer_factory: SignerFactory = RequestSigner,
    ) -> None:
        """Initialize the session.

        Args:
            settings: Provider locations and credentials. Read from the
                environment when omitted.
            transport: HTTP collaborator. Defaults to HttpxTransport.
            decoder: Response decoder. Defaults to ResponseDecoder.
            signer_factory: Builds a RequestSigner for the configured method.
        """
        self.settings = settings or SsoSettings()
        self._consumer = Consumer(self.settings.consumer_key, self.settings.consumer_secret)
        self._transport = transport or HttpxTransport()
        self._decoder = decoder or ResponseDecoder()
        self._signer_factory = signer_factory

        self._format = self.settings.response_format
        self._signature_method: Optional[SignatureMethod] = None
        self._token: Optional[Token] = None
        self._last_error: Optional[ErrorRecord] = None
        self._state = HandshakeState.UNCONFIGURED
        self._logger = logger.with_context(consumer_key=self._consumer.key)

        if self.settings.signature_method:
            self.configure_signature(self.settings.signature_method, self.settings.private_key)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def consumer(self) -> Consumer:
        return self._consumer

    @property
    def token(self) -> Optional[Token]:
        return self._token

    @property
    def signature_method(self) -> Optional[SignatureMethod]:
        return self._signature_method

    @property
    def state(self) -> HandshakeState:
        return self._state

    @property
    def last_error(self) -> Optional[ErrorRecord]:
        """The most recent failure, or None if the last handshake step succeeded."""
        return self._last_error

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure_signature(self, name: str, private_key: Optional[PrivateKey] = None) -> bool:
        """Install the signature method registered under ``name``.

        Args:
            name: HMAC[-SHA1] or RSA[-SHA1], case-insensitive.
            private_key: PEM key or RSA key object, required for RSA.

        Returns:
            True if the method is usable. On False no method is installed,
            so signed requests fail fast instead of using a stale method.
        """
        try:
            method = select_signature_method(name, private_key)
        except SignatureConfigurationError as e:
            self._signature_method = None
            self._state = HandshakeState.UNCONFIGURED
            self._record(e)
            return False

        self._signature_method = method
        self._last_error = None
        if self._state in (HandshakeState.UNCONFIGURED, HandshakeState.FAILED):
            self._state = (
                HandshakeState.TOKEN_OBTAINED if self._token is not None else HandshakeState.READY
            )
        self._logger.info(f"Signature method {method.name} installed")
        return True

    def format(self, change: Optional[str] = None) -> WireFormat:
        """Get or set the response format.

        Args:
            change: ``json`` or ``xml`` in any case. None or empty reads the
                current value.

        Returns:
            The format in effect.

        Raises:
            ConfigurationError: For any other value; the format is left unchanged.
        """
        if not change:
            return self._format

        parsed = change if isinstance(change, WireFormat) else WireFormat.parse(change)
        if parsed is None:
            error = ConfigurationError(
                f"Unknown format '{change}'. Valid format types: json, xml"
            )
            self._record(error)
            raise error

        self._format = parsed
        return self._format

    def resume_token(self, key: str, secret: str) -> None:
        """Re-seed a request token persisted by the host application.

        Use this when the callback is handled by a different session instance
        than the one that called request_token.
        """
        if not key:
            error = ConfigurationError("Token key is required")
            self._record(error)
            raise error
        self._token = Token(key, secret)
        if self._signature_method is not None:
            self._state = HandshakeState.TOKEN_OBTAINED

    # ------------------------------------------------------------------
    # Handshake operations
    # ------------------------------------------------------------------

    def request_token(
        self,
        callback_url: str,
        allow_suspended: bool = False,
        allow_inactive: bool = False,
    ) -> HandshakeResult:
        """Request a login token from the provider.

        Args:
            callback_url: Where the provider sends the user after login.
            allow_suspended: Let suspended members log in (forwarded as-is).
            allow_inactive: Let inactive members log in (forwarded as-is).

        Returns:
            The decoded provider response. On success the token is stored and
            ``payload["token"]`` holds it.
        """
        try:
            signer = self._signer()
            if not callback_url:
                raise ConfigurationError("A callback URL is required")

            request = signer.signed_request(
                self._consumer,
                None,
                "POST",
                self._api_url(self.settings.login_token_path),
                {
                    "oauth_callback": callback_url,
                    "oauth_allow_suspended": _flag(allow_suspended),
                    "oauth_allow_inactive": _flag(allow_inactive),
                },
            )
            self._logger.info("Requesting login token")
            result = self._send(request)

            token_data = result.payload.get("token")
            if not isinstance(token_data, dict) or not _is_confirmed(
                token_data.get("oauth_callback_confirmed")
            ):
                raise ProtocolMismatchError(
                    "Callback confirmation flag is missing or protocol mismatch"
                )
            if not token_data.get("oauth_token") or "oauth_token_secret" not in token_data:
                raise ResponseDecodeError("Response lacks token.oauth_token or oauth_token_secret")
        except SsoException as e:
            return self._fail(e)

        self._token = Token(str(token_data["oauth_token"]), str(token_data["oauth_token_secret"]))
        self._state = HandshakeState.TOKEN_OBTAINED
        self._last_error = None
        self._logger.info("Login token obtained")
        return result

    def redirect_target(self) -> Optional[str]:
        """URL of the provider login page for the stored token.

        The host application redirects the user agent there and ends its own
        handling of the current request.

        Returns:
            The login URL, or None (with ``last_error`` set) if no token is stored.
        """
        if self._token is None:
            self._record(ConfigurationError("No request token; call request_token first"))
            return None
        s = self.settings
        return f"{s.base_url}{s.redirect_path}{percent_encode(self._token.key)}"

    def check_login(self, token_key: str, token_secret: str, verifier: str) -> HandshakeResult:
        """Exchange the callback token and verifier for the user's identity.

        The token credentials come from the provider's callback (via the host
        application), not from session memory.

        Args:
            token_key: ``oauth_token`` from the callback.
            token_secret: Secret of the request token.
            verifier: ``oauth_verifier`` from the callback.

        Returns:
            The decoded identity response. On success the stored token is
            cleared, so a session cannot be replayed.
        """
        try:
            signer = self._signer()
            if self._token is None:
                raise ConfigurationError(
                    "No outstanding request token; the handshake was not started "
                    "or has already been completed"
                )
            if not token_key or not verifier:
                raise ConfigurationError("Token key and verifier are required")
            if token_key != self._token.key:
                self._logger.warning("Callback token differs from the stored request token")

            token = Token(token_key, token_secret or "")
            request = signer.signed_request(
                self._consumer,
                token,
                "POST",
                self._api_url(self.settings.user_data_path),
                {"oauth_token": token_key, "oauth_verifier": verifier},
            )
            self._logger.info("Verifying login")
            result = self._send(request)
        except SsoException as e:
            return self._fail(e)

        self._token = None
        self._state = HandshakeState.VERIFIED
        self._last_error = None
        self._logger.info("Login verified")
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _api_url(self, location: str) -> str:
        s = self.settings
        return f"{s.base_url}{s.api_path}{location}{self._format.value}/"

    def _signer(self) -> RequestSigner:
        if self._signature_method is None:
            raise SignatureConfigurationError("No signature method configured")
        return self._signer_factory(self._signature_method)

    def _send(self, request: SignedRequest) -> HandshakeResult:
        self._logger.debug(f"POST {request.url}")
        body = self._transport.post(request.url, request.body, self.settings.timeout_seconds)
        result = self._decoder.decode(self._format, body)
        if not result.success:
            raise ProviderRejectedError(result.error_message or "Provider rejected the request")
        return result

    def _record(self, error: SsoException) -> ErrorRecord:
        self._last_error = ErrorRecord.from_exception(error)
        self._logger.warning(f"{error.kind.value}: {error.message}")
        return self._last_error

    def _fail(self, error: SsoException) -> HandshakeResult:
        record = self._record(error)
        self._state = (
            HandshakeState.UNCONFIGURED
            if self._signature_method is None
            else HandshakeState.FAILED
        )
        return HandshakeResult.failed(record)

    def __repr__(self) -> str:
        return (
            f"HandshakeSession(consumer={self._consumer!r}, state={self._state.value!r}, "
            f"format={self._format.value!r})"
        )
