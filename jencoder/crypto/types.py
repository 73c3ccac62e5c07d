"""Type definitions for key material, algorithms, and signing keys."""

from enum import StrEnum
from typing import Any

from cryptography.hazmat.primitives import serialization
from jwt.algorithms import Algorithm
from pydantic import BaseModel, ConfigDict, Field


class KeyEncoding(StrEnum):
    """Textual key formats recognised by PEM header."""

    PKCS1_RSA = "PKCS1_RSA"
    PKCS8 = "PKCS8"
    SEC1_EC = "SEC1_EC"
    RAW = "RAW"
    UNKNOWN = "UNKNOWN"

    @property
    def label(self) -> str:
        """Name used in error messages; unframed text reads as "none"."""
        if self is KeyEncoding.RAW:
            return "none"
        return self.value


class AlgorithmFamily(StrEnum):
    """Signature scheme families of the JOSE algorithm catalogue."""

    HMAC = "HMAC"
    RSA = "RSA"
    RSA_PSS = "RSA-PSS"
    ECDSA = "ECDSA"
    EDDSA = "EdDSA"


class AlgorithmSpec(BaseModel):
    """Immutable registry entry for one JWS algorithm."""

    model_config = ConfigDict(frozen=True)

    id: str
    family: AlgorithmFamily
    accepted_encodings: tuple[KeyEncoding, ...]
    description: str
    curve: str | None = None

    @property
    def key_label(self) -> str:
        """Form label for the key input."""
        return "Secret" if self.family is AlgorithmFamily.HMAC else "Private Key"

    @property
    def is_symmetric(self) -> bool:
        return self.family is AlgorithmFamily.HMAC


class KeyMaterial(BaseModel):
    """User-supplied key text with its derived classification."""

    model_config = ConfigDict(frozen=True)

    raw: str = Field(repr=False)
    text: str = Field(repr=False)
    detected_encoding: KeyEncoding


class SigningKey:
    """Opaque handle binding an imported key to one algorithm."""

    __slots__ = ("_key", "_primitive", "algorithm", "family")

    def __init__(
        self,
        algorithm: str,
        family: AlgorithmFamily,
        key: Any,
        primitive: Algorithm,
    ) -> None:
        self.algorithm = algorithm
        self.family = family
        self._key = key
        self._primitive = primitive

    def __repr__(self) -> str:
        return f"SigningKey(algorithm={self.algorithm!r}, family={self.family.value!r})"

    def sign(self, signing_input: bytes) -> bytes:
        """Compute the raw JWS signature over ``signing_input``."""
        return self._primitive.sign(signing_input, self._key)

    def public_key_pem(self) -> str | None:
        """SubjectPublicKeyInfo PEM of an asymmetric key, ``None`` for HMAC."""
        if self.family is AlgorithmFamily.HMAC:
            return None
        return (
            self._key.public_key()
            .public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
            .decode()
        )
