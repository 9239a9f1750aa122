import sqlite3
from datetime import date
from pathlib import Path
from typing import Optional

from musicals.models import SHOW_TYPES, Musical

# Columns written by insert/update, in table order. id and timestamps are store-managed.
_FIELDS = (
    "title", "venue_name", "venue_address", "type", "start_date", "end_date",
    "description", "ticket_url", "image_url", "price_from", "schedule",
    "lottery_url", "lottery_price", "rush_url", "rush_price", "run_id",
)

_RUNNING_ON = "start_date <= :day AND (end_date IS NULL OR end_date >= :day)"


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    _create_schema(conn)
    return conn


def _create_schema(conn: sqlite3.Connection) -> None:
    types = ", ".join(f"'{t}'" for t in SHOW_TYPES)
    conn.executescript(f"""
        CREATE TABLE IF NOT EXISTS musicals (
            id            INTEGER PRIMARY KEY AUTOINCREMENT,
            run_id        TEXT UNIQUE,
            title         TEXT NOT NULL,
            venue_name    TEXT NOT NULL,
            venue_address TEXT,
            type          TEXT NOT NULL CHECK (type IN ({types})),
            start_date    DATE NOT NULL,
            end_date      DATE,
            description   TEXT,
            ticket_url    TEXT,
            image_url     TEXT,
            price_from    REAL,
            schedule      TEXT,
            lottery_url   TEXT,
            lottery_price REAL,
            rush_url      TEXT,
            rush_price    REAL,
            created_at    DATETIME DEFAULT CURRENT_TIMESTAMP,
            updated_at    DATETIME DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_musicals_dates ON musicals(start_date, end_date);
        CREATE INDEX IF NOT EXISTS idx_musicals_type ON musicals(type);
    """)
    conn.commit()


# --- Reads ---

def get_all_musicals(conn: sqlite3.Connection) -> list[Musical]:
    rows = conn.execute("SELECT * FROM musicals ORDER BY type, title").fetchall()
    return [_row_to_musical(r) for r in rows]


def get_running_musicals(
    conn: sqlite3.Connection,
    on_date: Optional[date] = None,
    show_type: Optional[str] = None,
) -> list[Musical]:
    """Listings whose run spans on_date (default today), optionally of one type."""
    params = {"day": (on_date or date.today()).isoformat()}
    query = f"SELECT * FROM musicals WHERE {_RUNNING_ON}"
    if show_type in SHOW_TYPES:
        query += " AND type = :type"
        params["type"] = show_type
    query += " ORDER BY type, title"
    return [_row_to_musical(r) for r in conn.execute(query, params).fetchall()]


def get_overlapping_musicals(conn: sqlite3.Connection, start: date, end: date) -> list[Musical]:
    """Listings whose run overlaps [start, end]. Schedules are not consulted here."""
    rows = conn.execute(
        """
        SELECT * FROM musicals
        WHERE start_date <= :end AND (end_date IS NULL OR end_date >= :start)
        ORDER BY type, title
        """,
        {"start": start.isoformat(), "end": end.isoformat()},
    ).fetchall()
    return [_row_to_musical(r) for r in rows]


def get_musical(conn: sqlite3.Connection, musical_id: int) -> Optional[Musical]:
    row = conn.execute("SELECT * FROM musicals WHERE id = ?", (musical_id,)).fetchone()
    return _row_to_musical(row) if row else None


def get_musical_by_run_id(conn: sqlite3.Connection, run_id: str) -> Optional[Musical]:
    row = conn.execute("SELECT * FROM musicals WHERE run_id = ?", (run_id,)).fetchone()
    return _row_to_musical(row) if row else None


def count_running(conn: sqlite3.Connection, on_date: Optional[date] = None) -> int:
    day = (on_date or date.today()).isoformat()
    row = conn.execute(
        f"SELECT COUNT(*) AS count FROM musicals WHERE {_RUNNING_ON}", {"day": day}
    ).fetchone()
    return row["count"]


def running_stats(conn: sqlite3.Connection, on_date: Optional[date] = None) -> list[dict]:
    day = (on_date or date.today()).isoformat()
    rows = conn.execute(
        f"""
        SELECT type, COUNT(*) AS count FROM musicals
        WHERE {_RUNNING_ON}
        GROUP BY type
        ORDER BY type
        """,
        {"day": day},
    ).fetchall()
    return [{"type": r["type"], "count": r["count"]} for r in rows]


# --- Writes ---

def insert_musical(conn: sqlite3.Connection, musical: Musical) -> Musical:
    columns = ", ".join(_FIELDS)
    placeholders = ", ".join(f":{f}" for f in _FIELDS)
    cursor = conn.execute(
        f"INSERT INTO musicals ({columns}) VALUES ({placeholders})",
        _musical_to_params(musical),
    )
    conn.commit()
    return get_musical(conn, cursor.lastrowid)


def update_musical(conn: sqlite3.Connection, musical_id: int, musical: Musical) -> Optional[Musical]:
    """Overwrite every field of the listing with this id. Returns None if there is no such listing."""
    assignments = ", ".join(f"{f} = :{f}" for f in _FIELDS)
    params = _musical_to_params(musical)
    params["id"] = musical_id
    cursor = conn.execute(
        f"UPDATE musicals SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = :id",
        params,
    )
    conn.commit()
    if cursor.rowcount == 0:
        return None
    return get_musical(conn, musical_id)


def delete_musical(conn: sqlite3.Connection, musical_id: int) -> bool:
    cursor = conn.execute("DELETE FROM musicals WHERE id = ?", (musical_id,))
    conn.commit()
    return cursor.rowcount > 0


def delete_all_musicals(conn: sqlite3.Connection) -> int:
    cursor = conn.execute("DELETE FROM musicals")
    conn.commit()
    return cursor.rowcount


def get_missing_run_ids(conn: sqlite3.Connection) -> list[Musical]:
    rows = conn.execute("SELECT * FROM musicals WHERE run_id IS NULL ORDER BY id").fetchall()
    return [_row_to_musical(r) for r in rows]


def set_run_id(conn: sqlite3.Connection, musical_id: int, run_id: str) -> None:
    conn.execute("UPDATE musicals SET run_id = ? WHERE id = ?", (run_id, musical_id))
    conn.commit()


def _musical_to_params(musical: Musical) -> dict:
    params = {f: getattr(musical, f) for f in _FIELDS}
    params["start_date"] = musical.start_date.isoformat()
    params["end_date"] = musical.end_date.isoformat() if musical.end_date else None
    return params


def _row_to_musical(row: sqlite3.Row) -> Musical:
    return Musical(
        id=row["id"],
        run_id=row["run_id"],
        title=row["title"],
        venue_name=row["venue_name"],
        venue_address=row["venue_address"],
        type=row["type"],
        start_date=date.fromisoformat(row["start_date"]),
        end_date=date.fromisoformat(row["end_date"]) if row["end_date"] else None,
        description=row["description"],
        ticket_url=row["ticket_url"],
        image_url=row["image_url"],
        price_from=row["price_from"],
        schedule=row["schedule"],
        lottery_url=row["lottery_url"],
        lottery_price=row["lottery_price"],
        rush_url=row["rush_url"],
        rush_price=row["rush_price"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
