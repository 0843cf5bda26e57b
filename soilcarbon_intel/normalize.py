"""
Input normalization for extracted records.

Responsibilities:
- coordinate normalization (ranges, lists, units -> one float)
- coordinate cleaning of extracted records
- decoding uploaded abstracts to text
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional, Union

from charset_normalizer import from_bytes

from .models import ExtractedData
from .rules import COORDINATE_FIELDS, COORDINATE_PRECISION

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.\-,]")


def is_present(value: Any) -> bool:
    """None and the empty string both mean "absent"."""
    return value is not None and value != ""


def _parse_float(text: str) -> Optional[float]:
    """
    The whole text must be a number; there is no prefix parsing.

    "10.5-" and "-10.5-12.5" (from "-10.5 to -12.5") give None rather than
    their leading number.
    """
    try:
        return float(text)
    except ValueError:
        return None


def _parse_all(parts: list[str]) -> list[float]:
    parsed = (_parse_float(p) for p in parts)
    return [n for n in parsed if n is not None]


def _mean(values: list[float]) -> float:
    return round(sum(values) / len(values), COORDINATE_PRECISION)


def normalize_coordinate(value: Union[str, float, int, None]) -> Optional[float]:
    """
    Collapse a raw coordinate into a single float.

    Rules:
    - absent -> None; numbers pass through unchanged
    - everything except digits, '.', '-' and ',' is stripped
    - "10, 20, 30" -> mean of the parseable parts
    - "10.5-12.5" -> mean of both ends (exactly two parts only)
    - "-10.5" is a negative number, not a range
    - anything unparseable -> None; this function never raises

    A string with several interior hyphens ("10-20-30") is not a range and
    fails the whole-string parse, so it yields None.
    """
    if not is_present(value):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value

    try:
        clean = _NON_NUMERIC.sub("", str(value)).strip()

        if "," in clean:
            parts = _parse_all(clean.split(","))
            if not parts:
                return None
            return _mean(parts)

        if "-" in clean and not clean.startswith("-"):
            parts = _parse_all(clean.split("-"))
            if len(parts) == 2:
                return _mean(parts)

        return _parse_float(clean)
    except Exception:
        logger.debug("Unparseable coordinate %r", value, exc_info=True)
        return None


def clean_extracted(data: ExtractedData) -> ExtractedData:
    """Return a copy of `data` with Longitude/Latitude normalized to floats."""
    updates = {
        field: normalize_coordinate(getattr(data, field))
        for field in COORDINATE_FIELDS
    }
    return data.model_copy(update=updates)


def decode_abstract_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode an uploaded abstract to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is dropped rather than kept as text.
    - If decode fails, fall back to UTF-8 with replacement characters and report it.
    - Newlines are normalized to LF.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        logger.warning("Decoding upload as %s failed; using utf-8 with replacement", decode_used)
        text = raw.decode("utf-8", errors="replace")
        decode_used = "utf-8"
        decode_fallback = True

    text = text.replace("\r\n", "\n").replace("\r", "\n").strip()

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, report
