"""Tests for the JSON encode/decode boundary."""

import json

import pytest

from pdp_client.exceptions import DeserializationError, SerializationError
from pdp_client.models import PdpRequest
from pdp_client.serialization import decode_mapping, decode_tree, encode_request


# ============================================================================
# Encoding
# ============================================================================


class TestEncodeRequest:
    """encode_request turns any JSON-compatible value into UTF-8 JSON bytes."""

    def test_encodes_mapping(self):
        body = encode_request({"user": "alice", "action": "read"})

        assert json.loads(body) == {"user": "alice", "action": "read"}

    def test_output_is_utf8(self):
        body = encode_request({"user": "zoë"})

        assert "zoë".encode("utf-8") in body

    @pytest.mark.parametrize("value", [None, True, 1, 1.5, "x", [1, "two", None]])
    def test_encodes_any_json_value(self, value):
        assert json.loads(encode_request(value)) == value

    def test_pdp_request_matches_equivalent_dict(self):
        # Arrange
        typed = PdpRequest(subject={"id": "alice"}, action="read", resource={"type": "doc", "id": 7})
        untyped = {"subject": {"id": "alice"}, "action": "read", "resource": {"type": "doc", "id": 7}, "context": None}

        # Act & Assert
        assert encode_request(typed) == encode_request(untyped)

    def test_unsupported_type_raises(self):
        with pytest.raises(SerializationError) as exc_info:
            encode_request({"when": object()})

        assert str(exc_info.value).startswith("encoding request:")

    def test_nan_raises(self):
        with pytest.raises(SerializationError):
            encode_request({"score": float("nan")})

    def test_circular_reference_raises(self):
        # Arrange
        value: dict = {}
        value["self"] = value

        # Act & Assert
        with pytest.raises(SerializationError):
            encode_request(value)


# ============================================================================
# Decoding
# ============================================================================


class TestDecodeTree:
    """decode_tree accepts any JSON document."""

    def test_object(self):
        assert decode_tree(b'{"result": {"allow": true}}') == {"result": {"allow": True}}

    @pytest.mark.parametrize("body,expected", [(b"[1,2]", [1, 2]), (b"true", True), (b"null", None), (b'"x"', "x")])
    def test_non_object_values(self, body: bytes, expected):
        assert decode_tree(body) == expected

    @pytest.mark.parametrize("body", [b"", b"<html>500</html>", b"{", b"\xff\xfe"])
    def test_invalid_body_raises(self, body: bytes):
        with pytest.raises(DeserializationError) as exc_info:
            decode_tree(body)

        assert exc_info.value.stage == "decoding response"

    @pytest.mark.parametrize("body", [b'{"result": NaN}', b"[Infinity]", b"-Infinity"])
    def test_non_finite_constants_raise(self, body: bytes):
        with pytest.raises(DeserializationError, match="not valid JSON"):
            decode_tree(body)

    def test_deeply_nested_body_raises(self):
        # Arrange
        body = b"[" * 100000 + b"]" * 100000

        # Act & Assert
        with pytest.raises(DeserializationError, match="nested too deeply"):
            decode_tree(body)


class TestDecodeMapping:
    """decode_mapping requires a top-level JSON object."""

    def test_values_stay_arbitrary_json(self):
        # Act
        result = decode_mapping(b'{"result": {"allow": false, "reasons": ["a", "b"]}, "decision_id": "d1"}')

        # Assert
        assert result == {"result": {"allow": False, "reasons": ["a", "b"]}, "decision_id": "d1"}

    @pytest.mark.parametrize("body", [b"[]", b"1", b"null", b'"x"'])
    def test_non_object_raises(self, body: bytes):
        with pytest.raises(DeserializationError, match="expected a JSON object"):
            decode_mapping(body)
