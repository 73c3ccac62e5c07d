"""Tests for payload repair and prettifying."""

import json

import pytest

from jencoder.core.errors import InvalidPayloadError
from jencoder.tokens.repair import repair_payload


class TestRepairPayload:
    """Tests for repair_payload."""

    def test_valid_json_prettified(self) -> None:
        result = repair_payload('{"sub":"1","admin":true}')
        assert result == '{\n  "sub": "1",\n  "admin": true\n}'

    def test_single_quotes_repaired(self) -> None:
        result = repair_payload("{'sub': '1234567890'}")
        assert json.loads(result) == {"sub": "1234567890"}

    def test_trailing_comma_repaired(self) -> None:
        result = repair_payload('{"sub": "1", "name": "x",}')
        assert json.loads(result) == {"sub": "1", "name": "x"}

    def test_missing_brace_repaired(self) -> None:
        assert json.loads(repair_payload('{"sub": "1"')) == {"sub": "1"}

    def test_array_rejected(self) -> None:
        with pytest.raises(InvalidPayloadError):
            repair_payload("[1, 2, 3]")
