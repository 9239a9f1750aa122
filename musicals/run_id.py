"""
Run identifiers: the natural key used to match imported rows to stored listings.

A run id is "<title>-<venue>-<start date>", e.g.
    generate_run_id("Les Misérables", "Sondheim Theatre", "2004-09-01")
    -> "les-misrables-sondheim-theatre-2004-09-01"

Two listings with the same title, venue and start date share a run id, so a
re-imported spreadsheet row updates the existing listing instead of adding a
duplicate.
"""

import re
from datetime import date
from typing import Union

_APOSTROPHES = re.compile(r"['’]")
_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(text: str) -> str:
    text = _APOSTROPHES.sub("", text.lower())
    text = _DISALLOWED.sub("", text)
    text = _WHITESPACE.sub("-", text)
    text = _HYPHENS.sub("-", text)
    return text.strip("-")


def generate_run_id(title: str, venue_name: str, start_date: Union[date, str]) -> str:
    if isinstance(start_date, date):
        start_date = start_date.isoformat()
    return f"{slugify(title)}-{slugify(venue_name)}-{start_date}"
