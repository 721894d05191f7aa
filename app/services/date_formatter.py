"""Locale-aware date formatting for post pages.

Patterns use the Unicode/date-fns notation (``d MMM y``) and are translated
to pendulum tokens, so month and weekday names come from pendulum's locale
data. ``None`` means "no date" and formats to an empty string.
"""

import re
from datetime import datetime
from typing import Optional, Union

import pendulum

from app.exceptions import InvalidTimestamp

PUBLISHED_DATE_PATTERN = "d MMM y"
EDITED_DATE_PATTERN = "'* editado em' d MMM y', às' HH:mm"

DEFAULT_LOCALE = "pt_br"
DEFAULT_TIMEZONE = "UTC"

_TOKENS = {
    "d": "D",
    "dd": "DD",
    "M": "M",
    "MM": "MM",
    "MMM": "MMM",
    "MMMM": "MMMM",
    "y": "YYYY",
    "yy": "YY",
    "yyyy": "YYYY",
    "EEE": "ddd",
    "EEEE": "dddd",
    "H": "H",
    "HH": "HH",
    "h": "h",
    "hh": "hh",
    "m": "m",
    "mm": "mm",
    "s": "s",
    "ss": "ss",
    "a": "A",
}

_PATTERN_PART = re.compile(r"'(?:[^']|'')+'|''|([A-Za-z])\1*|[^A-Za-z']+")
# Prismic emits offsets without a colon: 2021-03-25T19:25:28+0000
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")

Timestamp = Union[str, datetime]


def translate_pattern(pattern: str) -> str:
    """Translate a Unicode date pattern into pendulum's format tokens."""
    parts = []
    pos = 0
    while pos < len(pattern):
        match = _PATTERN_PART.match(pattern, pos)
        if not match:
            raise ValueError(f"Unterminated literal in date pattern {pattern!r}")
        part = match.group(0)
        pos = match.end()

        if part == "''":
            parts.append("[']")
        elif part.startswith("'"):
            literal = part[1:-1].replace("''", "'")
            parts.append(f"[{literal}]")
        elif match.group(1):
            if part not in _TOKENS:
                raise ValueError(f"Unsupported date pattern token {part!r}")
            parts.append(_TOKENS[part])
        else:
            parts.append(f"[{part}]")
    return "".join(parts)


def parse_timestamp(value: Timestamp, tz: str = DEFAULT_TIMEZONE) -> pendulum.DateTime:
    if isinstance(value, datetime):
        return pendulum.instance(value, tz=tz)
    if not isinstance(value, str) or not value.strip():
        raise InvalidTimestamp(value)

    normalized = _COMPACT_OFFSET.sub(r"\1:\2", value.strip())
    try:
        parsed = pendulum.parse(normalized, tz=tz)
    except (ValueError, TypeError) as e:
        raise InvalidTimestamp(value) from e
    if not isinstance(parsed, pendulum.DateTime):
        raise InvalidTimestamp(value)
    return parsed


def format_date(
    value: Optional[Timestamp],
    pattern: str = PUBLISHED_DATE_PATTERN,
    locale: str = DEFAULT_LOCALE,
    tz: str = DEFAULT_TIMEZONE,
) -> str:
    if value is None:
        return ""
    moment = parse_timestamp(value).in_timezone(tz)
    return moment.format(translate_pattern(pattern), locale=locale)
