"""
Wire codecs for provider payloads.

Each codec turns an ordered parameter mapping into request bytes and a
response body back into an ordered mapping. Decoding failures raise
ParseError, which the lifecycle converts into a failed Response.
"""

import json
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import parse_qsl, urlencode

import structlog

from unified_gateway.models.exceptions import ParseError

logger = structlog.get_logger(__name__)


class Codec(ABC):
    """Encode/decode provider payloads."""

    content_type: str = "application/octet-stream"

    @abstractmethod
    def encode(self, params: dict[str, Any]) -> bytes:
        pass

    @abstractmethod
    def decode(self, body: bytes) -> dict[str, Any]:
        pass


class FormCodec(Codec):
    """application/x-www-form-urlencoded key/value pairs."""

    content_type = "application/x-www-form-urlencoded"

    def encode(self, params: dict[str, Any]) -> bytes:
        pairs = [(key, "" if value is None else str(value)) for key, value in params.items()]
        return urlencode(pairs).encode("utf-8")

    def decode(self, body: bytes) -> dict[str, Any]:
        text = _to_text(body).strip()
        if not text:
            raise ParseError("Empty form-encoded response body")

        try:
            pairs = parse_qsl(text, keep_blank_values=True, strict_parsing=True)
        except ValueError as e:
            logger.warning("form_decode_failed", error=str(e), body_length=len(text))
            raise ParseError(f"Malformed form-encoded response: {e}") from e

        return dict(pairs)


class JsonCodec(Codec):
    """application/json documents with an object at the top level."""

    content_type = "application/json"

    def encode(self, params: dict[str, Any]) -> bytes:
        return json.dumps(params, separators=(",", ":")).encode("utf-8")

    def decode(self, body: bytes) -> dict[str, Any]:
        text = _to_text(body).strip()
        if not text:
            raise ParseError("Empty JSON response body")

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("json_decode_failed", error=str(e), body_length=len(text))
            raise ParseError(f"Malformed JSON response: {e.msg}") from e

        if not isinstance(document, dict):
            raise ParseError(
                f"Expected a JSON object, got {type(document).__name__}"
            )
        return document


def _to_text(body: bytes | str) -> str:
    if isinstance(body, str):
        return body
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"Response body is not valid UTF-8: {e}") from e
