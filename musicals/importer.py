"""
Bulk upsert of imported rows, keyed by run id.

Rows are handled one at a time in input order. A row whose run id already
exists overwrites that listing in full; otherwise a new listing is inserted.
A failing row is reported and skipped, and never stops the rest of the batch.
Importing the same rows twice leaves the table unchanged and reports every row
as updated the second time.
"""

import logging
import sqlite3
from dataclasses import asdict, dataclass, field
from typing import Iterable, Optional

import musicals.db as db_module
from musicals.fields import musical_from_payload
from musicals.run_id import generate_run_id

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    inserted: int = 0
    updated: int = 0
    errors: list[dict] = field(default_factory=list)   # [{"row": title, "error": message}]

    def to_dict(self) -> dict:
        return asdict(self)


def _row_run_id(row: dict) -> Optional[str]:
    run_id = row.get("run_id")
    if isinstance(run_id, str) and run_id.strip():
        return run_id.strip()
    return None


def _label(row) -> Optional[str]:
    return row.get("title") if isinstance(row, dict) else None


def reconcile(conn: sqlite3.Connection, rows: Iterable[dict]) -> ImportResult:
    result = ImportResult()
    for row in rows:
        try:
            if not isinstance(row, dict):
                raise ValueError(f"Expected an object per row, got {type(row).__name__}")
            musical = musical_from_payload(row, run_id=_row_run_id(row))
            existing = db_module.get_musical_by_run_id(conn, musical.run_id)
            if existing:
                db_module.update_musical(conn, existing.id, musical)
                result.updated += 1
            else:
                db_module.insert_musical(conn, musical)
                result.inserted += 1
        except (ValueError, sqlite3.Error) as exc:
            conn.rollback()
            logger.warning("Import row '%s' failed: %s", _label(row), exc)
            result.errors.append({"row": _label(row), "error": str(exc)})

    logger.info("Import finished: %d inserted, %d updated, %d errors",
                result.inserted, result.updated, len(result.errors))
    return result


def backfill_run_ids(conn: sqlite3.Connection) -> int:
    """Give listings created before run ids existed their run id. Returns how many were set."""
    migrated = 0
    for musical in db_module.get_missing_run_ids(conn):
        run_id = generate_run_id(musical.title, musical.venue_name, musical.start_date)
        db_module.set_run_id(conn, musical.id, run_id)
        migrated += 1
    if migrated:
        logger.info("Backfilled run ids for %d listings", migrated)
    return migrated
