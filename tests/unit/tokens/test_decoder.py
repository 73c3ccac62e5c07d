"""Tests for display-only token decoding."""

import jwt
import pytest
from jwt.utils import base64url_encode

from jencoder.core.errors import MalformedTokenError
from jencoder.tokens.decoder import decode_token

SECRET = "decoder-test-secret-that-is-long-enough-for-hs256"
CLAIMS = {"sub": "1234567890", "name": "John Doe", "iat": 1516239022}


@pytest.fixture
def token() -> str:
    return jwt.encode(CLAIMS, SECRET, algorithm="HS256")


class TestDecodeToken:
    """Tests for decode_token."""

    def test_decodes_header_and_payload(self, token: str) -> None:
        decoded = decode_token(token)
        assert decoded.header == {"alg": "HS256", "typ": "JWT"}
        assert decoded.payload == CLAIMS
        assert decoded.signature == token.split(".")[2]

    def test_tampered_signature_still_decodes(self, token: str) -> None:
        header, payload, _ = token.split(".")
        decoded = decode_token(f"{header}.{payload}.AAAA")
        assert decoded.payload == CLAIMS

    def test_empty_signature_decodes(self, token: str) -> None:
        header, payload, _ = token.split(".")
        assert decode_token(f"{header}.{payload}.").signature == ""

    def test_bearer_prefix_ignored(self, token: str) -> None:
        assert decode_token(f"Bearer {token}").payload == CLAIMS

    def test_surrounding_whitespace_ignored(self, token: str) -> None:
        assert decode_token(f"  {token}\n").payload == CLAIMS

    @pytest.mark.parametrize("bad", ["", "abc", "a.b", "a.b.c.d"])
    def test_wrong_segment_count(self, bad: str) -> None:
        with pytest.raises(MalformedTokenError, match="3 segments"):
            decode_token(bad)

    def test_header_not_base64(self, token: str) -> None:
        _, payload, signature = token.split(".")
        with pytest.raises(MalformedTokenError, match="header"):
            decode_token(f"!!!!.{payload}.{signature}")

    def test_payload_not_json(self, token: str) -> None:
        header, _, signature = token.split(".")
        with pytest.raises(MalformedTokenError, match="payload"):
            decode_token(f"{header}.bm90IGpzb24.{signature}")

    def test_payload_not_object(self, token: str) -> None:
        header, _, signature = token.split(".")
        # base64url of "[1,2]"
        with pytest.raises(MalformedTokenError, match="JSON object"):
            decode_token(f"{header}.WzEsMl0.{signature}")

    def test_deeply_nested_segment(self) -> None:
        segment = base64url_encode(b'{"a":' + b"[" * 100_000).decode()
        with pytest.raises(MalformedTokenError, match="header"):
            decode_token(f"{segment}.{segment}.x")

    @pytest.mark.parametrize(
        "payload", [b'{"n": NaN}', b'{"sub": "\\ud800"}'], ids=["nan", "surrogate"]
    )
    def test_payload_not_standard_json(self, token: str, payload: bytes) -> None:
        header, _, signature = token.split(".")
        segment = base64url_encode(payload).decode()
        with pytest.raises(MalformedTokenError, match="standard JSON"):
            decode_token(f"{header}.{segment}.{signature}")
