"""Conversion of engine failures into JSON error responses."""

from starlette.responses import JSONResponse

from jencoder.core.errors import ErrorKind, TokenError

HTTP_BAD_REQUEST = 400
HTTP_UNPROCESSABLE = 422

_STATUS_BY_KIND = {
    ErrorKind.INVALID_PAYLOAD: HTTP_UNPROCESSABLE,
}


def error_response(exc: TokenError) -> JSONResponse:
    """JSON body ``{"error": <kind>, "error_description": ...}``."""
    status_code = _STATUS_BY_KIND.get(exc.kind, HTTP_BAD_REQUEST)
    return JSONResponse(exc.details(), status_code=status_code)
