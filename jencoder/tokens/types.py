"""Type definitions for signing requests and their results."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jencoder.tokens.claims import DEFAULT_EXPIRY_SECONDS, resolve_expiry_seconds

BEARER_PREFIX = "Bearer "


class SigningRequest(BaseModel):
    """Everything needed for one "Generate" action."""

    model_config = ConfigDict(frozen=True)

    algorithm: str
    payload: str | dict[str, Any]
    key_material: str = Field(repr=False)
    add_iat: bool = False
    add_exp: bool = False
    exp_offset: int = DEFAULT_EXPIRY_SECONDS
    custom_exp_minutes: int | None = None

    @property
    def expiry_seconds(self) -> int:
        return resolve_expiry_seconds(self.exp_offset, self.custom_exp_minutes)


class SignedToken(BaseModel):
    """Compact JWS serialization split into its three segments.

    ``public_key`` is the SubjectPublicKeyInfo PEM matching an asymmetric
    signing key, ``None`` for HMAC.
    """

    model_config = ConfigDict(frozen=True)

    header_segment: str
    payload_segment: str
    signature_segment: str
    public_key: str | None = None

    @property
    def compact(self) -> str:
        return ".".join(
            (self.header_segment, self.payload_segment, self.signature_segment)
        )

    def as_bearer(self) -> str:
        """Authorization header value for the token."""
        return f"{BEARER_PREFIX}{self.compact}"

    def __str__(self) -> str:
        return self.compact


class DecodedToken(BaseModel):
    """Header and payload of a token, decoded without verification."""

    header: dict[str, Any]
    payload: dict[str, Any]
    signature: str
