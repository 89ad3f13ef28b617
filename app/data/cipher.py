"""
Placeholder cipher.

NOT encryption: values are base64 text behind an "FHE-" tag and anyone can
read them back. The derive step decodes first, so nothing here is homomorphic.
Kept only so stored payloads stay compatible with the existing front-end.
"""

from __future__ import annotations

import base64
import binascii
import math

from data.errors import DecodeError


PREFIX = "FHE-"


def _number_text(value: float) -> str:
    # Mirror JS Number#toString for the common cases: 10 -> "10", not "10.0"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def encode(value: float) -> str:
    text = _number_text(float(value))
    return PREFIX + base64.b64encode(text.encode("ascii")).decode("ascii")


def decode(text: str) -> float:
    raw = text
    if text.startswith(PREFIX):
        try:
            raw = base64.b64decode(text[len(PREFIX):], validate=True).decode("ascii")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise DecodeError(f"Invalid cipher payload: {text!r}") from e
    try:
        return float(raw)
    except ValueError as e:
        raise DecodeError(f"Not a numeric literal: {raw!r}") from e


def derive(text: str) -> str:
    """
    Stand-in for the association statistic: exp(-0.1 * x), re-encoded.
    """
    value = decode(text)
    try:
        derived = math.exp(-0.1 * value)
    except OverflowError:
        derived = math.inf
    return encode(derived)
