"""
Input decoding.

Responsibilities:
- bytes -> str, UTF-8 first, charset-normalizer guess otherwise
- newline normalization (CRLF -> LF; a lone CR is not a line break and is kept)
- a small report describing what was done
"""

from __future__ import annotations

from typing import Any, Dict

from charset_normalizer import from_bytes

from .rules import SOURCE_ENCODING


def _detect_encoding(raw: bytes) -> str | None:
    match = from_bytes(raw).best()
    if match is None:
        return None
    return match.encoding


def _decode(raw: bytes) -> tuple[str, Dict[str, Any]]:
    detected = None
    decode_fallback = False

    try:
        return raw.decode(SOURCE_ENCODING), {
            "detected": "utf_8",
            "decode_used": SOURCE_ENCODING,
            "decode_fallback": False,
        }
    except UnicodeDecodeError:
        detected = _detect_encoding(raw)

    decode_used = detected or "utf-8"
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        # Last resort: decode with replacement so conversion can continue deterministically
        decode_used = "utf-8"
        text = raw.decode(decode_used, errors="replace")
        decode_fallback = True

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }


def normalize_newlines(text: str) -> tuple[str, Dict[str, Any]]:
    before = {
        "crlf": text.count("\r\n"),
        "cr": text.count("\r") - text.count("\r\n"),
        "lf": text.count("\n"),
    }

    text = text.replace("\r\n", "\n")

    return text, {
        "policy": "lf",
        "before": before,
        "changed": before["crlf"] > 0,
    }


def decode_text(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode raw file contents into LF-terminated text.

    Returns the text and a report with "encoding" and "newlines" sections.
    """
    text, encoding = _decode(raw)
    text, newlines = normalize_newlines(text)
    return text, {"encoding": encoding, "newlines": newlines}
