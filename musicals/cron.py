"""Daily job: log how many listings are running today. Run once a day from the system scheduler (`lm cron`)."""

import logging
import sqlite3
from datetime import date
from typing import Optional

import musicals.db as db_module

logger = logging.getLogger(__name__)


def count_active(conn: sqlite3.Connection, today: Optional[date] = None) -> int:
    today = today or date.today()
    count = db_module.count_running(conn, today)
    logger.info("[Cron] %s: %d active musicals", today.isoformat(), count)
    return count
