"""Claims parsing and injection of the iat/exp registered claims."""

import json
import time
from collections.abc import Callable, Mapping
from typing import Any

from jencoder.core.errors import InvalidPayloadError

Clock = Callable[[], int]

EXP_PRESETS: dict[str, int] = {
    "5 minutes": 300,
    "15 minutes": 900,
    "1 hour": 3600,
    "6 hours": 21600,
    "1 day": 86400,
}
CUSTOM_EXP_OFFSET = -1
DEFAULT_EXPIRY_SECONDS = 3600
DEFAULT_CUSTOM_EXP_MINUTES = 60


def system_clock() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


def to_json_bytes(value: Mapping[str, Any]) -> bytes:
    """Compact UTF-8 JSON, keys in insertion order.

    Raises ``ValueError`` for NaN, infinities and unencodable strings such as
    lone surrogates, ``TypeError`` for values JSON cannot represent and
    ``RecursionError`` for overly deep nesting.
    """
    return json.dumps(
        value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    ).encode("utf-8")


def _reject_constant(name: str) -> Any:
    raise InvalidPayloadError(f"{name} is not valid JSON")


def _check_serializable(claims: dict[str, Any]) -> dict[str, Any]:
    try:
        to_json_bytes(claims)
    except RecursionError as exc:
        raise InvalidPayloadError("Payload is nested too deeply") from exc
    except (ValueError, TypeError) as exc:
        raise InvalidPayloadError(f"Payload is not serializable: {exc}") from exc
    return claims


def parse_claims(text: str | Mapping[str, Any]) -> dict[str, Any]:
    """Parse claims JSON text, or copy a claims mapping, into a new dict.

    Raises:
        InvalidPayloadError: for malformed JSON, a non-object document or
            claims that do not serialize back to standard UTF-8 JSON.
    """
    if isinstance(text, Mapping):
        return _check_serializable(dict(text))
    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise InvalidPayloadError(f"Invalid JSON format: {exc.msg}") from exc
    except RecursionError as exc:
        raise InvalidPayloadError("Payload is nested too deeply") from exc
    if not isinstance(parsed, dict):
        raise InvalidPayloadError(
            f"Payload must be a JSON object, not {type(parsed).__name__}"
        )
    return _check_serializable(parsed)


def resolve_expiry_seconds(exp_offset: int, custom_exp_minutes: int | None) -> int:
    """Lifetime in seconds for an offset preset or the custom minute count."""
    if exp_offset == CUSTOM_EXP_OFFSET:
        minutes = custom_exp_minutes
        if minutes is None or minutes <= 0:
            minutes = DEFAULT_CUSTOM_EXP_MINUTES
        return minutes * 60
    if exp_offset > 0:
        return exp_offset
    return DEFAULT_EXPIRY_SECONDS


def assemble_claims(
    claims: Mapping[str, Any],
    *,
    add_iat: bool = False,
    add_exp: bool = False,
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
    clock: Clock = system_clock,
) -> dict[str, Any]:
    """Copy ``claims`` and set ``iat``/``exp`` from a single clock reading.

    Existing ``iat`` or ``exp`` values are overwritten when the matching flag
    is set. The input mapping is never modified.
    """
    assembled = dict(claims)
    now = int(clock())
    if add_iat:
        assembled["iat"] = now
    if add_exp:
        assembled["exp"] = now + expiry_seconds
    return assembled
