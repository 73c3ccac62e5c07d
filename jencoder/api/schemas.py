"""Pydantic schemas matching the browser form's field names."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from jencoder.core.settings import DEFAULT_ALGORITHM
from jencoder.crypto.types import AlgorithmSpec
from jencoder.tokens.claims import DEFAULT_CUSTOM_EXP_MINUTES, DEFAULT_EXPIRY_SECONDS

CONFIG_STORE_KEY = "jencoder-config"
CONFIG_EXPORT_FILENAME = "jencoder-config.json"
SECRET_FIELDS = ("secret", "privateKey")

DEFAULT_PAYLOAD = json.dumps(
    {"sub": "1234567890", "name": "John Doe", "iat": 1516239022}, indent=2
)


def _to_camel(name: str) -> str:
    """Convert snake_case to camelCase for JSON serialization."""
    parts = name.split("_")
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=_to_camel, populate_by_name=True)


class JWTConfig(_CamelModel):
    """Settings blob of the token form; also the generate request body."""

    algorithm: str = DEFAULT_ALGORITHM
    payload: str = DEFAULT_PAYLOAD
    secret: str = "your-256-bit-secret"
    private_key: str = "your-2048-bit-pkcs8-private-key"
    public_key: str = "your-public-key"
    add_iat: bool = False
    add_exp: bool = False
    exp_offset: int = DEFAULT_EXPIRY_SECONDS
    custom_exp_minutes: int = DEFAULT_CUSTOM_EXP_MINUTES
    include_bearer: bool = True


class AlgorithmInfo(_CamelModel):
    """Algorithm metadata shown next to the key input."""

    id: str
    family: str
    key_label: str
    description: str
    accepted_encodings: list[str] = Field(default_factory=list)

    @classmethod
    def from_spec(cls, spec: AlgorithmSpec) -> "AlgorithmInfo":
        return cls(
            id=spec.id,
            family=spec.family.value,
            key_label=spec.key_label,
            description=spec.description,
            accepted_encodings=[e.value for e in spec.accepted_encodings],
        )


class GenerateResponse(_CamelModel):
    """Signed token with its decoded parts for display."""

    token: str
    bearer: str | None = None
    header: dict[str, Any]
    payload: dict[str, Any]
    public_key: str | None = None


class DecodeRequest(_CamelModel):
    token: str


class DecodeResponse(_CamelModel):
    """Decoded header and payload. The signature is NOT verified."""

    header: dict[str, Any]
    payload: dict[str, Any]
    signature: str


class PayloadText(_CamelModel):
    payload: str
