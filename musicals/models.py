from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional

# Display spellings as stored in the database and used in CSV files.
WEST_END = "West End"
OFF_WEST_END = "Off West End"
DRAMA_SCHOOL = "Drama School"

SHOW_TYPES = (WEST_END, OFF_WEST_END, DRAMA_SCHOOL)

# Schedule keys, Monday first to match date.weekday().
WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


@dataclass
class Musical:
    title: str
    venue_name: str
    type: str          # One of SHOW_TYPES
    start_date: date
    end_date: Optional[date] = None    # None means an open-ended run
    venue_address: Optional[str] = None
    description: Optional[str] = None
    ticket_url: Optional[str] = None
    image_url: Optional[str] = None
    price_from: Optional[float] = None
    schedule: Optional[str] = None     # JSON text, e.g. {"mon": {"m": null, "e": "19:30"}}
    lottery_url: Optional[str] = None
    lottery_price: Optional[float] = None
    rush_url: Optional[str] = None
    rush_price: Optional[float] = None
    run_id: Optional[str] = None
    # Populated by DB layer
    id: Optional[int] = field(default=None, repr=False)
    created_at: Optional[str] = field(default=None, repr=False)
    updated_at: Optional[str] = field(default=None, repr=False)

    def to_dict(self) -> dict:
        """Plain dict with ISO dates, as returned by the JSON API."""
        data = asdict(self)
        data["start_date"] = self.start_date.isoformat()
        data["end_date"] = self.end_date.isoformat() if self.end_date else None
        return data
