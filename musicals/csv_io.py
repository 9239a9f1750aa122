"""
CSV files for the admin import/export buttons.

Import headers are trimmed, lower-cased and stripped to [a-z_], so " Title"
and "TITLE" both read as "title"; otherwise they must match the column names
below. Export writes every column, including run_id, so an exported file can
be edited and imported back as an update.
"""

import csv
import io
import re
from typing import Iterable

from musicals.models import Musical

EXPORT_COLUMNS = [
    "run_id", "title", "venue_name", "venue_address", "type", "start_date", "end_date",
    "description", "ticket_url", "price_from", "schedule", "lottery_url",
    "lottery_price", "rush_url", "rush_price",
]

_TEMPLATE_EXAMPLE = [
    "Example Musical", "Theatre Name", "123 London St, W1", "West End", "2025-01-01",
    "2025-12-31", "A great show", "https://example.com", "29.99",
    '{"mon":{"m":null,"e":"19:30"}}', "", "", "", "",
]

_HEADER_JUNK = re.compile(r"[^a-z_]")


def _normalise_header(name: str) -> str:
    return _HEADER_JUNK.sub("", name.strip().lower())


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into one dict per data row, keyed by normalised header."""
    lines = [line for line in io.StringIO(text.lstrip("\ufeff")) if line.strip()]
    rows = list(csv.reader(lines))
    if len(rows) < 2:
        return []

    headers = [_normalise_header(h) for h in rows[0]]
    records = []
    for values in rows[1:]:
        values = [v.strip() for v in values]
        records.append({h: values[i] if i < len(values) else "" for i, h in enumerate(headers)})
    return records


def _cell(value) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def export_csv(musicals: Iterable[Musical]) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for m in musicals:
        writer.writerow([_cell(getattr(m, col)) for col in EXPORT_COLUMNS])
    return out.getvalue()


def template_csv() -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS[1:])
    writer.writerow(_TEMPLATE_EXAMPLE)
    return out.getvalue()
