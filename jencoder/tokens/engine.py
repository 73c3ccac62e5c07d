"""Public entry points for signing and display decoding.

``sign`` and ``decode_for_display`` never raise a ``TokenError``; failures are
returned as the exception instance so callers branch on the result type.
"""

import asyncio
import logging

from jencoder.core.errors import TokenError
from jencoder.crypto.algorithms import lookup_algorithm
from jencoder.crypto.keys import import_signing_key
from jencoder.crypto.pem import normalize_key_material
from jencoder.tokens.claims import Clock, assemble_claims, parse_claims, system_clock
from jencoder.tokens.decoder import decode_token
from jencoder.tokens.signer import encode_token
from jencoder.tokens.types import DecodedToken, SignedToken, SigningRequest

logger = logging.getLogger(__name__)


def _sign(request: SigningRequest, clock: Clock) -> SignedToken:
    claims = parse_claims(request.payload)
    spec = lookup_algorithm(request.algorithm)
    material = normalize_key_material(request.key_material)
    key = import_signing_key(material, spec)
    assembled = assemble_claims(
        claims,
        add_iat=request.add_iat,
        add_exp=request.add_exp,
        expiry_seconds=request.expiry_seconds,
        clock=clock,
    )
    return encode_token(spec, key, assembled)


def sign(
    request: SigningRequest, clock: Clock = system_clock
) -> SignedToken | TokenError:
    """Build and sign a token for ``request``.

    Claims are validated before any key handling, so an invalid payload is
    reported even when the key material is also unusable.
    """
    try:
        token = _sign(request, clock)
    except TokenError as exc:
        logger.info(
            "Token generation with %s failed: %s", request.algorithm, exc.kind
        )
        return exc
    logger.debug("Signed %s token", request.algorithm)
    return token


def decode_for_display(token: str) -> DecodedToken | TokenError:
    """Decode header and payload of ``token`` WITHOUT verifying the signature.

    The result is for display only. See ``jencoder.tokens.decoder``.
    """
    try:
        return decode_token(token)
    except TokenError as exc:
        logger.debug("Token decode failed: %s", exc)
        return exc


async def sign_async(
    request: SigningRequest, clock: Clock = system_clock
) -> SignedToken | TokenError:
    """Run ``sign`` in a worker thread; key parsing and signing are CPU-bound."""
    return await asyncio.to_thread(sign, request, clock)


async def decode_for_display_async(token: str) -> DecodedToken | TokenError:
    return await asyncio.to_thread(decode_for_display, token)
