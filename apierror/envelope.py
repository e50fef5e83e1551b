"""Encode an error message into the ``{"error": <message>}`` response body."""

import json
import logging
from typing import Callable

logger = logging.getLogger(__name__)

ENVELOPE_KEY = "error"


def _encode_json(message: str) -> bytes:
    return json.dumps(
        {ENVELOPE_KEY: message},
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")


def _encode_text(message: str) -> bytes:
    return message.encode("utf-8")


def _encode_empty(message: str) -> bytes:
    return b""


# Tried in order; the last one cannot fail.
ENCODERS: tuple[Callable[[str], bytes], ...] = (_encode_json, _encode_text)


def encode_envelope(message: str) -> bytes:
    """Return the response body for ``message``.

    Falls back to the raw UTF-8 message, then to an empty body, so that
    building an error response never raises.
    """
    for encoder in ENCODERS:
        try:
            return encoder(message)
        except Exception:
            logger.debug("Envelope encoder %s failed", encoder.__name__, exc_info=True)
    return _encode_empty(message)
