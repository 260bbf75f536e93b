"""
Input rules for book identifiers and creation requests.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Optional

from .errors import INVALID_FIELDS, INVALID_ID, INVALID_YEAR, InvalidArgument
from .models import NewBook

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Plain ASCII decimal numbers, optionally with a fraction or exponent
NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

MIN_YEAR = 1450


def is_uuid(value: Any) -> bool:
    return isinstance(value, str) and UUID_RE.match(value) is not None


def require_uuid(value: Any) -> str:
    if not is_uuid(value):
        raise InvalidArgument(INVALID_ID)
    return value


def normalize_string(value: Any) -> str:
    """Trim strings; any other type counts as missing."""
    return value.strip() if isinstance(value, str) else ""


def parse_year(value: Any, today: Optional[date] = None) -> Optional[int]:
    """Parse an optional publication year.

    ``None`` and ``""`` mean "no year". Integers, integral floats and
    numeric strings are accepted when they fall within
    [``MIN_YEAR``, current year]; anything else raises
    ``InvalidArgument``.
    """
    if value is None or value == "":
        return None
    # bool is an int subclass
    if isinstance(value, bool):
        raise InvalidArgument(INVALID_YEAR)

    if isinstance(value, int):
        year = value
    else:
        if isinstance(value, float):
            number = value
        elif isinstance(value, str):
            text = value.strip()
            if not NUMBER_RE.fullmatch(text):
                raise InvalidArgument(INVALID_YEAR)
            number = float(text)
        else:
            raise InvalidArgument(INVALID_YEAR)
        if not math.isfinite(number) or not number.is_integer():
            raise InvalidArgument(INVALID_YEAR)
        year = int(number)

    current = (today or date.today()).year
    if year < MIN_YEAR or year > current:
        raise InvalidArgument(INVALID_YEAR)
    return year


def parse_new_book(payload: Any) -> NewBook:
    """Validate a creation payload.

    Missing or blank ``title``/``author`` are reported before an invalid
    ``year`` so that clients get one message at a time.
    """
    if not isinstance(payload, dict):
        payload = {}

    title = normalize_string(payload.get("title"))
    author = normalize_string(payload.get("author"))
    if not title or not author:
        raise InvalidArgument(INVALID_FIELDS)

    year = parse_year(payload.get("year"))
    return NewBook(title=title, author=author, year=year)
