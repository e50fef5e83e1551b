"""Tests for the JSON error envelope encoder."""

import json

import pytest

from apierror import envelope
from apierror.envelope import encode_envelope


class TestEncodeEnvelope:
    def test_compact_json(self):
        """The body is the bare {"error": ...} object without whitespace."""
        assert encode_envelope("Resource not found") == b'{"error":"Resource not found"}'

    @pytest.mark.parametrize(
        "message",
        [
            "",
            'He said "no"',
            "back\\slash",
            "line\nbreak\ttab\x00nul\x1f",
            "café ✓ 日本語",
            "emoji 😀",
            "</script>",
        ],
    )
    def test_valid_json_for_any_message(self, message):
        """Quotes, control and non-ASCII characters round-trip as JSON."""
        body = encode_envelope(message)
        assert json.loads(body.decode("utf-8")) == {"error": message}

    def test_non_ascii_is_utf8(self):
        """Non-ASCII characters are emitted as UTF-8, not \\u escapes."""
        assert encode_envelope("é") == '{"error":"é"}'.encode("utf-8")

    def test_lone_surrogate_degrades_to_empty(self):
        """A message that is not valid UTF-8 at all yields an empty body."""
        assert encode_envelope("\ud800") == b""


class TestEncoderFallback:
    def test_text_fallback_when_json_fails(self, monkeypatch):
        """If JSON encoding fails the raw message bytes are used."""

        def broken_json(message):
            raise TypeError("encoder unavailable")

        monkeypatch.setattr(envelope, "ENCODERS", (broken_json, envelope._encode_text))
        assert encode_envelope("boom") == b"boom"

    def test_empty_fallback_when_everything_fails(self, monkeypatch):
        """The last tier never raises."""

        def broken(message):
            raise ValueError("nope")

        monkeypatch.setattr(envelope, "ENCODERS", (broken, broken))
        assert encode_envelope("boom") == b""

    def test_non_string_message(self):
        """Non-string input still produces a body rather than an error."""
        assert encode_envelope(object()) == b""
