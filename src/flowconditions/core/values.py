"""Value helpers - normalisation, number/date parsing and list broadcasting."""

import math
import unicodedata
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Optional

from ..schemas import VariableValue


Predicate = Callable[[Optional[str], Optional[str]], bool]

NAN = float("nan")

_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}
_INT_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}

_CALENDAR_DATES = (
    "%b %d, %Y", "%B %d, %Y", "%b %d %Y", "%B %d %Y",
    "%d %b %Y", "%d %B %Y", "%m/%d/%Y", "%Y/%m/%d",
)
CALENDAR_FORMATS = tuple(
    fmt + suffix for fmt in _CALENDAR_DATES for suffix in ("", " %H:%M", " %H:%M:%S")
)


def normalize(text: str) -> str:
    """Unicode NFC form."""
    return unicodedata.normalize("NFC", text)


def fold(text: str) -> str:
    """Lowercase, strip and normalise a string for case-insensitive tests."""
    return normalize(text.lower().strip())


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def compare(predicate: Predicate, a: VariableValue, b: VariableValue, mode: str = "every") -> bool:
    """Apply a scalar predicate, broadcasting over list operands.

    Scalars (strings or None) are passed straight to the predicate. A list on
    either side is reduced with all() for mode "every" and any() for "some";
    with lists on both sides the same reduction is used at both levels.
    """
    reduce = all if mode == "every" else any
    if not is_sequence(a):
        if not is_sequence(b):
            return predicate(a, b)
        return reduce(predicate(a, item) for item in b)
    if not is_sequence(b):
        return reduce(predicate(item, b) for item in a)
    return reduce(reduce(predicate(x, y) for y in b) for x in a)


def to_number(text: str) -> float:
    """Parse a string the way JavaScript's Number() does; NaN when it can't."""
    stripped = text.strip()
    if not stripped:
        return 0.0
    if stripped in _INFINITIES:
        return _INFINITIES[stripped]
    # int()/float() also take digit underscores and non-ASCII digits, Number() does not
    if "_" in stripped or not stripped.isascii():
        return NAN
    prefix = stripped[:2].lower()
    if prefix in _INT_PREFIXES:
        digits = stripped[2:]
        if not digits.isalnum():
            return NAN
        try:
            return float(int(digits, _INT_PREFIXES[prefix]))
        except ValueError:
            return NAN
    # float() also takes "inf" and "nan"
    if not any(ch.isdigit() for ch in stripped):
        return NAN
    try:
        return float(stripped)
    except ValueError:
        return NAN


def parse_date(text: str) -> float:
    """Milliseconds since the epoch for a date string, else NaN.

    ISO-8601 is tried first, then RFC 2822, then the month-name and
    slash-separated forms in CALENDAR_FORMATS ("Jan 15, 2024", "15 Jan 2024",
    "1/15/2024", "2024/01/15"). Dates without an offset are read as UTC.
    """
    stripped = text.strip()
    if not stripped:
        return NAN
    iso = stripped[:-1] + "+00:00" if stripped.endswith(("Z", "z")) else stripped
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(stripped)
        except (TypeError, ValueError, IndexError):
            parsed = _parse_calendar_date(stripped)
    if parsed is None:
        return NAN
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp() * 1000


def _parse_calendar_date(text: str) -> Optional[datetime]:
    """Month-name and slash-separated dates, e.g. "Jan 15, 2024" or "1/15/2024"."""
    collapsed = " ".join(text.split())
    for fmt in CALENDAR_FORMATS:
        try:
            return datetime.strptime(collapsed, fmt)
        except ValueError:
            continue
    return None


def parse_date_or_number(text: str) -> float:
    """Number first, then a calendar date; NaN when neither parses."""
    number = to_number(text)
    if math.isnan(number):
        return parse_date(text)
    return number
