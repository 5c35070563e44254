"""Conversion of front matter values into the types a Post needs."""

import re
from datetime import date, datetime, timezone
from pathlib import PurePosixPath
from typing import Any, FrozenSet, Mapping, Optional, Tuple

from dateutil import parser as date_parser

from . import exc

# Jekyll's convention: _posts/2020-03-14-some-title.md
FILENAME_REGEX = re.compile(r"^(\d{4}-\d{2}-\d{2})-(.+)$")

# dateutil will have a go at nearly anything ("March" is a date to it) so
# insist on something that at least starts like an ISO date
ISOISH_DATE_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}")

WHITESPACE_REGEX = re.compile(r"\s+")

NON_SLUG_REGEX = re.compile(r"[^\w\- ]")


class DateConverter:
    def convert(self, value: Any, source: str) -> datetime:
        """Turn a front matter date (which YAML may already have parsed) into
        a timezone aware datetime.  Naive values are taken to be UTC."""
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, str):
            stripped = value.strip()
            if not ISOISH_DATE_REGEX.match(stripped):
                raise exc.UnparseableDate(source, value)
            try:
                parsed = date_parser.parse(stripped)
            except (ValueError, OverflowError) as e:
                raise exc.UnparseableDate(source, value) from e
        else:
            raise exc.UnparseableDate(source, value)

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


def split_filename(name: str) -> Tuple[Optional[str], str]:
    """Returns the date prefix (if any) and the slug of a post's filename."""
    stem = PurePosixPath(name.replace("\\", "/")).stem
    match = FILENAME_REGEX.match(stem)
    if match:
        return match.group(1), match.group(2)
    return None, stem


def categories_from_metadata(metadata: Mapping[str, Any]) -> FrozenSet[str]:
    """Jekyll allows either a list, or a space-separated string."""
    categories = set()
    for key in ["categories", "category"]:
        value = metadata.get(key)
        if value is None:
            continue
        elif isinstance(value, str):
            categories.update(v for v in WHITESPACE_REGEX.split(value) if v)
        else:
            categories.update(v.strip() for v in value if v.strip())
    return frozenset(categories)


def slugify(text: str) -> str:
    """'Why Rust?' becomes 'why-rust'.  Dots and slashes never survive, so a
    slug is always safe to use as a path segment."""
    text = NON_SLUG_REGEX.sub("", text.lower())
    return "-".join(text.split())
