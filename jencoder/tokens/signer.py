"""Compact JWS serialization and signing."""

from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from jwt.exceptions import PyJWTError
from jwt.utils import base64url_encode

from jencoder.core.errors import InvalidPayloadError, SigningFailureError
from jencoder.crypto.types import AlgorithmSpec, SigningKey
from jencoder.tokens.claims import to_json_bytes
from jencoder.tokens.types import SignedToken

TOKEN_TYPE = "JWT"


def build_header(spec: AlgorithmSpec) -> dict[str, str]:
    return {"alg": spec.id, "typ": TOKEN_TYPE}


def encode_token(
    spec: AlgorithmSpec, key: SigningKey, claims: dict[str, Any]
) -> SignedToken:
    """Serialize and sign ``claims`` as a compact JWS.

    Raises:
        InvalidPayloadError: if ``claims`` is not representable as standard
            UTF-8 JSON.
        SigningFailureError: if the key is bound to another algorithm or the
            signature primitive rejects it.
    """
    if key.algorithm != spec.id or key.family is not spec.family:
        raise SigningFailureError(spec.id, f"key was imported for {key.algorithm}")
    try:
        payload_json = to_json_bytes(claims)
    except (ValueError, TypeError, RecursionError) as exc:
        raise InvalidPayloadError(f"Payload is not serializable: {exc}") from exc
    header_segment = base64url_encode(to_json_bytes(build_header(spec)))
    payload_segment = base64url_encode(payload_json)
    signing_input = header_segment + b"." + payload_segment
    try:
        signature = key.sign(signing_input)
        public_key = key.public_key_pem()
    except (ValueError, TypeError, UnsupportedAlgorithm, PyJWTError) as exc:
        raise SigningFailureError(spec.id, str(exc) or type(exc).__name__) from exc
    return SignedToken(
        header_segment=header_segment.decode("ascii"),
        payload_segment=payload_segment.decode("ascii"),
        signature_segment=base64url_encode(signature).decode("ascii"),
        public_key=public_key,
    )
