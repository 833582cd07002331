"""Millisecond timestamps, their sentinels and the persisted-value codec.

A timestamp is a signed 64-bit count of milliseconds since the Unix epoch.
The two extremal values of that range carry control meaning:

- NOT_AVAILABLE: the factor has no opinion. Ignored when folding factor
  readings, but a valid value to hand to a persist operation.
- TRIAL_INVALID: the factor detected tampering. Dominates every other
  reading.

Persisted values are the decimal text of the timestamp, base64 encoded.
"""

from __future__ import annotations

import base64
import binascii
import re

from trial_guard.core.domain.errors import TimestampDecodeError

NOT_AVAILABLE: int = 2**63 - 1
TRIAL_INVALID: int = -(2**63)

# Plain decimal text of NOT_AVAILABLE, used as the "missing" default when
# reading a settings store.
NOT_AVAILABLE_TEXT: str = str(NOT_AVAILABLE)

MS_PER_SECOND = 1_000
MS_PER_DAY = 86_400 * MS_PER_SECOND

# Strict decimal form: no sign other than "-", no underscores, no padding.
_DECIMAL_RE = re.compile(r"-?[0-9]+")


def describe(timestamp: int) -> str:
    """Human-readable label, used in logs and events."""
    if timestamp == NOT_AVAILABLE:
        return "NOT_AVAILABLE"
    if timestamp == TRIAL_INVALID:
        return "TRIAL_INVALID"
    return str(timestamp)


def encode_timestamp(timestamp: int) -> str:
    """Encode a timestamp (sentinels included) for a settings store value."""
    if not TRIAL_INVALID <= timestamp <= NOT_AVAILABLE:
        raise ValueError(f"timestamp out of signed 64-bit range: {timestamp}")
    return base64.b64encode(str(timestamp).encode("ascii")).decode("ascii")


def decode_timestamp(value: str) -> int:
    """Decode a value produced by encode_timestamp.

    Surrounding whitespace (e.g. a trailing newline added by MIME-style
    encoders) is ignored. Anything else that does not decode back to a
    signed 64-bit integer raises TimestampDecodeError.
    """
    raw = value.strip()
    try:
        text = base64.b64decode(raw, validate=True).decode("ascii")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise TimestampDecodeError(value, f"not base64 ascii ({exc})") from exc

    if _DECIMAL_RE.fullmatch(text) is None:
        raise TimestampDecodeError(value, f"not a decimal integer: {text!r}")
    timestamp = int(text)

    if not TRIAL_INVALID <= timestamp <= NOT_AVAILABLE:
        raise TimestampDecodeError(value, "outside signed 64-bit range")
    return timestamp
