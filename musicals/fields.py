"""
Parsing and validation for listing fields arriving from the admin form or a CSV import.

Everything here raises ValueError on bad input; callers decide whether that
becomes a 500 response or a per-row import error.
"""

import json
import logging
import math
import re
from datetime import date
from typing import Any, Optional

from dateutil import parser as dateparser

from musicals.models import SHOW_TYPES, Musical
from musicals.run_id import generate_run_id

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DAY_FIRST_DATE = re.compile(r"^\d{1,2}[/-]\d{1,2}[/-]\d{4}$")

_TEXT_FIELDS = (
    "venue_address", "description", "ticket_url", "image_url", "lottery_url", "rush_url",
)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _text(value: Any) -> Optional[str]:
    if _blank(value):
        return None
    return str(value).strip()


def parse_date(value: Any) -> Optional[date]:
    """Accept a date, 'YYYY-MM-DD', or day-first 'DD/MM/YYYY' / 'DD-MM-YYYY'."""
    if _blank(value):
        return None
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    if _ISO_DATE.match(raw):
        return date.fromisoformat(raw)
    if _DAY_FIRST_DATE.match(raw):
        return dateparser.parse(raw, dayfirst=True).date()
    raise ValueError(f"Invalid date '{raw}'. Use YYYY-MM-DD or DD/MM/YYYY format.")


def parse_price(value: Any, name: str = "price") -> Optional[float]:
    """Blank means no price. Anything else must be a non-negative number."""
    if _blank(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid {name} {value!r}")
    raw = value if isinstance(value, (int, float)) else str(value).strip().lstrip("£").replace(",", "")
    try:
        amount = float(raw)
    except (ValueError, OverflowError):
        raise ValueError(f"Invalid {name} '{value}'") from None
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"Invalid {name} '{value}'")
    return amount


def parse_schedule(value: Any) -> Optional[str]:
    """
    Normalise a weekly schedule to JSON text.

    Dicts (from the JSON API) are serialised. Text is kept as-is even when it
    is not valid JSON; the availability check ignores unreadable schedules.
    """
    if _blank(value):
        return None
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":")) if value else None
    return str(value).strip()


def musical_from_payload(data: dict, run_id: Optional[str] = None) -> Musical:
    """
    Build a validated Musical from an admin JSON body or an import row.

    If run_id is not given it is derived from title, venue and start date.
    """
    title = _text(data.get("title"))
    venue_name = _text(data.get("venue_name"))
    if not title:
        raise ValueError("title is required")
    if not venue_name:
        raise ValueError("venue_name is required")

    show_type = _text(data.get("type"))
    if show_type not in SHOW_TYPES:
        raise ValueError(
            f"Invalid type '{show_type}'. Expected one of: {', '.join(SHOW_TYPES)}"
        )

    start_date = parse_date(data.get("start_date"))
    if start_date is None:
        raise ValueError("start_date is required")
    end_date = parse_date(data.get("end_date"))
    if end_date and end_date < start_date:
        logger.warning("'%s' at %s ends (%s) before it starts (%s)",
                       title, venue_name, end_date, start_date)

    musical = Musical(
        title=title,
        venue_name=venue_name,
        type=show_type,
        start_date=start_date,
        end_date=end_date,
        price_from=parse_price(data.get("price_from"), "price_from"),
        schedule=parse_schedule(data.get("schedule")),
        lottery_price=parse_price(data.get("lottery_price"), "lottery_price"),
        rush_price=parse_price(data.get("rush_price"), "rush_price"),
        run_id=run_id or generate_run_id(title, venue_name, start_date),
    )
    for name in _TEXT_FIELDS:
        setattr(musical, name, _text(data.get(name)))
    return musical
