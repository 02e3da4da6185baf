"""Canonical request construction.

Builds the signature base string and POST body per RFC 5849:

    base_string = METHOD & enc(normalized_url) & enc(normalized_params)

The parameter ordering (encoded key, then encoded value) must match the
provider byte for byte or the signature is rejected upstream.
"""

from typing import Iterable, List, Mapping, Tuple, Union
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from vatsim_sso.core.exceptions import CanonicalizationError

Parameters = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value: str) -> str:
    """Percent-encode a value according to RFC 3986.

    Encodes all characters except unreserved: A-Z, a-z, 0-9, -, ., _, ~
    Space becomes %20, never +.
    """
    if value is None or isinstance(value, bool):
        raise CanonicalizationError(f"Cannot encode {value!r}; pass text")
    try:
        return quote(str(value), safe="~", encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise CanonicalizationError(f"Cannot encode {value!r} as UTF-8") from e


def normalize_url(url: str) -> str:
    """Lowercase scheme and host, drop default ports, query and fragment."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS or not parts.hostname:
        raise CanonicalizationError(f"Expected an absolute http(s) URL, got {url!r}")

    try:
        port = parts.port
    except ValueError as e:
        raise CanonicalizationError(f"Invalid port in {url!r}") from e

    netloc = parts.hostname.lower()
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    return urlunsplit((scheme, netloc, parts.path or "/", "", ""))


def query_parameters(url: str) -> List[Tuple[str, str]]:
    """Query string pairs of ``url``; they are part of the signed parameter set."""
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


class CanonicalRequestBuilder:
    """Pure functions for base strings and form bodies."""

    def normalize_parameters(self, parameters: Parameters) -> str:
        """Encode, sort and join parameters as ``k=v&k=v``.

        Sorted by encoded key, then encoded value. The sort is stable, so
        identical pairs keep their input order.
        """
        items = parameters.items() if isinstance(parameters, Mapping) else parameters
        encoded = [(percent_encode(k), percent_encode(v)) for k, v in items]
        encoded.sort(key=lambda kv: (kv[0], kv[1]))
        return "&".join(f"{k}={v}" for k, v in encoded)

    def base_string(self, method: str, url: str, parameters: Parameters) -> str:
        """Build the signature base string."""
        items = list(parameters.items() if isinstance(parameters, Mapping) else parameters)
        items.extend(query_parameters(url))

        parts = [
            method.upper(),
            percent_encode(normalize_url(url)),
            percent_encode(self.normalize_parameters(items)),
        ]
        return "&".join(parts)

    def build(self, method: str, url: str, parameters: Parameters) -> Tuple[str, str]:
        """Return ``(base_string, encoded_body)`` for a request.

        The body holds the request parameters only; query parameters of
        ``url`` are signed but stay in the URL.
        """
        items = list(parameters.items() if isinstance(parameters, Mapping) else parameters)
        return self.base_string(method, url, items), self.encode_body(items)

    def encode_body(self, parameters: Parameters) -> str:
        """Serialize parameters as an application/x-www-form-urlencoded body."""
        return self.normalize_parameters(parameters)
