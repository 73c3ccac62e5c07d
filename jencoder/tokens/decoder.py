"""Decoding of compact tokens for display.

Nothing here verifies a signature. A decoded header or payload is only an
echo of what the token claims about itself and must not inform any trust
decision; a token with a forged or tampered signature decodes the same way.
"""

import binascii
import json
from typing import Any

from jwt.utils import base64url_decode

from jencoder.core.errors import MalformedTokenError
from jencoder.tokens.claims import to_json_bytes
from jencoder.tokens.types import BEARER_PREFIX, DecodedToken

TOKEN_SEGMENTS = 3


def _decode_segment(segment: str, name: str) -> dict[str, Any]:
    try:
        raw = base64url_decode(segment.encode("ascii"))
        value = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError, RecursionError) as exc:
        raise MalformedTokenError(f"Token {name} is not base64url JSON") from exc
    if not isinstance(value, dict):
        raise MalformedTokenError(f"Token {name} is not a JSON object")
    try:
        to_json_bytes(value)
    except (ValueError, TypeError, RecursionError) as exc:
        raise MalformedTokenError(f"Token {name} is not standard JSON") from exc
    return value


def decode_token(token: str) -> DecodedToken:
    """Split a compact token and decode its header and payload.

    A leading ``Bearer`` prefix is ignored.

    Raises:
        MalformedTokenError: unless the token has exactly three segments whose
            first two are base64url-encoded JSON objects.
    """
    compact = token.strip()
    if compact.startswith(BEARER_PREFIX):
        compact = compact[len(BEARER_PREFIX) :].strip()
    parts = compact.split(".")
    if len(parts) != TOKEN_SEGMENTS:
        raise MalformedTokenError(
            f"Token must have {TOKEN_SEGMENTS} segments, found {len(parts)}"
        )
    header_segment, payload_segment, signature = parts
    return DecodedToken(
        header=_decode_segment(header_segment, "header"),
        payload=_decode_segment(payload_segment, "payload"),
        signature=signature,
    )
