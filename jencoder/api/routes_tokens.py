"""Token generation, display decoding and algorithm metadata endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from jencoder.api.deps import get_clock
from jencoder.api.errors import error_response
from jencoder.api.schemas import (
    AlgorithmInfo,
    DecodeRequest,
    DecodeResponse,
    GenerateResponse,
    JWTConfig,
)
from jencoder.core.errors import TokenError
from jencoder.crypto.algorithms import find_algorithm, list_algorithms
from jencoder.tokens.claims import Clock
from jencoder.tokens.engine import decode_for_display_async, sign_async
from jencoder.tokens.types import SigningRequest

router = APIRouter(prefix="/api")


def _signing_request(form: JWTConfig) -> SigningRequest:
    """Pick the secret or the private key field by algorithm family."""
    spec = find_algorithm(form.algorithm)
    key_material = form.secret if spec and spec.is_symmetric else form.private_key
    return SigningRequest(
        algorithm=form.algorithm,
        payload=form.payload,
        key_material=key_material,
        add_iat=form.add_iat,
        add_exp=form.add_exp,
        exp_offset=form.exp_offset,
        custom_exp_minutes=form.custom_exp_minutes,
    )


@router.get("/algorithms")
async def algorithms() -> list[AlgorithmInfo]:
    """Supported algorithms in catalogue order."""
    return [AlgorithmInfo.from_spec(spec) for spec in list_algorithms()]


@router.post("/tokens", response_model=None)
async def generate_token(
    form: JWTConfig,
    clock: Annotated[Clock, Depends(get_clock)],
) -> GenerateResponse | JSONResponse:
    """POST /api/tokens -- sign the payload and echo its decoded parts."""
    signed = await sign_async(_signing_request(form), clock)
    if isinstance(signed, TokenError):
        return error_response(signed)
    decoded = await decode_for_display_async(signed.compact)
    if isinstance(decoded, TokenError):
        return error_response(decoded)
    return GenerateResponse(
        token=signed.compact,
        bearer=signed.as_bearer() if form.include_bearer else None,
        header=decoded.header,
        payload=decoded.payload,
        public_key=signed.public_key,
    )


@router.post("/tokens/decode", response_model=None)
async def decode_token(body: DecodeRequest) -> DecodeResponse | JSONResponse:
    """POST /api/tokens/decode -- decode for display; signature NOT verified."""
    decoded = await decode_for_display_async(body.token)
    if isinstance(decoded, TokenError):
        return error_response(decoded)
    return DecodeResponse(
        header=decoded.header,
        payload=decoded.payload,
        signature=decoded.signature,
    )
