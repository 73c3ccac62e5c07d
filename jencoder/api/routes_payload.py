"""Payload editor helper endpoints."""

from fastapi import APIRouter
from starlette.responses import JSONResponse

from jencoder.api.errors import error_response
from jencoder.api.schemas import PayloadText
from jencoder.core.errors import InvalidPayloadError
from jencoder.tokens.repair import repair_payload

router = APIRouter(prefix="/api/payload")


@router.post("/repair", response_model=None)
async def repair(body: PayloadText) -> PayloadText | JSONResponse:
    """POST /api/payload/repair -- fix and prettify payload JSON."""
    try:
        return PayloadText(payload=repair_payload(body.payload))
    except InvalidPayloadError as exc:
        return error_response(exc)
