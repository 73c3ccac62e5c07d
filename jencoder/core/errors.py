"""Classified failures raised by the signing and decoding engine."""

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Stable identifiers for each failure class."""

    INVALID_PAYLOAD = "InvalidPayload"
    UNSUPPORTED_ALGORITHM = "UnsupportedAlgorithm"
    KEY_FORMAT = "KeyFormatError"
    SIGNING_FAILURE = "SigningFailure"
    MALFORMED_TOKEN = "MalformedToken"


class TokenError(Exception):
    """Base class for every failure the engine reports."""

    kind: ClassVar[ErrorKind]

    def details(self) -> dict[str, object]:
        """Serializable description used by the HTTP layer."""
        return {"error": self.kind.value, "error_description": str(self)}


class InvalidPayloadError(TokenError):
    """Claims text is not a well-formed JSON object."""

    kind = ErrorKind.INVALID_PAYLOAD


class UnsupportedAlgorithmError(TokenError):
    """Algorithm identifier is not in the registry."""

    kind = ErrorKind.UNSUPPORTED_ALGORITHM

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Unsupported algorithm: {algorithm!r}")

    def details(self) -> dict[str, object]:
        return {**super().details(), "algorithm": self.algorithm}


class KeyFormatError(TokenError):
    """Key material cannot be used with the selected algorithm."""

    kind = ErrorKind.KEY_FORMAT

    def __init__(
        self,
        algorithm: str,
        detected_encoding: str,
        accepted_encodings: tuple[str, ...],
        reason: str | None = None,
    ) -> None:
        self.algorithm = algorithm
        self.detected_encoding = detected_encoding
        self.accepted_encodings = accepted_encodings
        self.reason = reason
        accepted = ", ".join(accepted_encodings)
        message = (
            f"{algorithm} requires a key encoded as {accepted}; "
            f"detected encoding: {detected_encoding}"
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    def details(self) -> dict[str, object]:
        return {
            **super().details(),
            "algorithm": self.algorithm,
            "detected_encoding": self.detected_encoding,
            "accepted_encodings": list(self.accepted_encodings),
        }


class SigningFailureError(TokenError):
    """The signature primitive rejected an otherwise accepted key."""

    kind = ErrorKind.SIGNING_FAILURE

    def __init__(self, algorithm: str, reason: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Signing with {algorithm} failed: {reason}")


class MalformedTokenError(TokenError):
    """Compact token could not be split or its segments decoded."""

    kind = ErrorKind.MALFORMED_TOKEN
