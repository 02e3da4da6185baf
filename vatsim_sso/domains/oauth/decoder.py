"""Provider response decoding.

Both wire formats normalize to the same nested-dict tree:

    JSON: {"request": {"result": "success"}, "token": {...}}
    XML:  <sso><request><result>success</result></request><token>...</token></sso>

The XML root element is a wrapper; its children become the top-level keys.
"""

import json
import xml.etree.ElementTree as ET
from typing import Any, Dict, Union

from vatsim_sso.core.config.enums import WireFormat
from vatsim_sso.core.exceptions import ErrorKind, ResponseDecodeError
from vatsim_sso.domains.oauth.types import HandshakeResult

SUCCESS = "success"


def _element_to_value(element: ET.Element) -> Union[str, Dict[str, Any]]:
    children = list(element)
    if not children:
        return (element.text or "").strip()

    tree: Dict[str, Any] = {}
    for child in children:
        value = _element_to_value(child)
        if child.tag in tree:
            if not isinstance(tree[child.tag], list):
                tree[child.tag] = [tree[child.tag]]
            tree[child.tag].append(value)
        else:
            tree[child.tag] = value
    return tree


class ResponseDecoder:
    """Parses provider bodies and separates provider failures from garbage."""

    def parse(self, response_format: WireFormat, raw_body: Union[str, bytes]) -> Dict[str, Any]:
        """Parse ``raw_body`` into a tree.

        Raises:
            ResponseDecodeError: If the body is not a well-formed document of the format.
        """
        if isinstance(raw_body, bytes):
            try:
                raw_body = raw_body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ResponseDecodeError(f"Response is not valid UTF-8: {e}") from e

        if response_format == WireFormat.XML:
            try:
                tree = _element_to_value(ET.fromstring(raw_body))
            except ET.ParseError as e:
                raise ResponseDecodeError(f"Malformed XML response: {e}") from e
            except RecursionError as e:
                raise ResponseDecodeError("XML response is nested too deeply") from e
        else:
            try:
                tree = json.loads(raw_body)
            except ValueError as e:
                raise ResponseDecodeError(f"Malformed JSON response: {e}") from e
            except RecursionError as e:
                raise ResponseDecodeError("JSON response is nested too deeply") from e

        if not isinstance(tree, dict):
            raise ResponseDecodeError(
                f"Expected a structured {response_format.value} document, got {type(tree).__name__}"
            )
        return tree

    def decode(self, response_format: WireFormat, raw_body: Union[str, bytes]) -> HandshakeResult:
        """Decode a provider response into a HandshakeResult.

        Returns:
            A successful result carrying the whole tree as payload, or a failed
            result with ``error_kind=PROVIDER_REJECTED`` and the provider message.

        Raises:
            ResponseDecodeError: If the body is unparsable or lacks ``request.result``.
        """
        tree = self.parse(response_format, raw_body)

        request = tree.get("request")
        if not isinstance(request, dict) or "result" not in request:
            raise ResponseDecodeError("Response lacks request.result")

        if str(request["result"]).strip().lower() == SUCCESS:
            return HandshakeResult(success=True, payload=tree)

        message = request.get("message") or "Provider reported a failure without a message"
        return HandshakeResult(
            success=False,
            error_message=str(message),
            error_kind=ErrorKind.PROVIDER_REJECTED,
        )
