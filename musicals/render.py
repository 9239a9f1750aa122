from datetime import date
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from musicals.availability import (
    CLOSING_SOON_WEEKS,
    DEFAULT_WINDOW_MONTHS,
    default_window,
    status,
)
from musicals.models import SHOW_TYPES, Musical

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _format_date(d: date) -> str:
    # "5 Mar 2025"
    return f"{d.day} {d.strftime('%b %Y')}"


def date_text(musical: Musical, today: date) -> str:
    """Card caption: 'Only on ...', 'Until ...', 'Open run' or 'From ... until ...'."""
    start, end = musical.start_date, musical.end_date
    if end and start == end:
        return f"Only on {_format_date(start)}"
    if start <= today:
        return f"Until {_format_date(end)}" if end else "Open run"
    if end:
        return f"From {_format_date(start)} until {_format_date(end)}"
    return f"From {_format_date(start)}"


def price_text(musical: Musical) -> str:
    return f"From £{musical.price_from:.2f}" if musical.price_from else ""


def _musical_to_view(musical: Musical, today: date) -> dict:
    """Serialise a Musical to a plain dict for JSON embedding in the template."""
    data = musical.to_dict()
    data["date_text"] = date_text(musical, today)
    data["price_text"] = price_text(musical)
    data["status"] = status(musical, today)
    data["type_slug"] = musical.type.lower().replace(" ", "-")
    return data


def _environment(site_cfg: dict) -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
    )
    env.globals["site_title"] = site_cfg.get("title", "London Musicals")
    return env


def render_index(musicals: Iterable[Musical], site_cfg: dict, today: date | None = None) -> str:
    today = today or date.today()
    window_start, window_end = default_window(today, site_cfg.get("window_months", DEFAULT_WINDOW_MONTHS))
    env = _environment(site_cfg)
    return env.get_template("index.html").render(
        musicals=[_musical_to_view(m, today) for m in musicals],
        show_types=SHOW_TYPES,
        today=today.isoformat(),
        today_long=f"{today.strftime('%A')}, {today.day} {today.strftime('%B %Y')}",
        window_start=window_start.isoformat(),
        window_end=window_end.isoformat(),
        closing_soon_weeks=site_cfg.get("closing_soon_weeks", CLOSING_SOON_WEEKS),
    )


def render_admin(musicals: Iterable[Musical], site_cfg: dict, today: date | None = None) -> str:
    today = today or date.today()
    env = _environment(site_cfg)
    return env.get_template("admin.html").render(
        musicals=[_musical_to_view(m, today) for m in musicals],
        show_types=SHOW_TYPES,
        today=today.isoformat(),
    )
