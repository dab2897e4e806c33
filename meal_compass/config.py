"""Key-value settings storage backed by the SQLite settings table.

Known keys:
    goals: JSON list of goals (see core/goals.py SettingsGoalStore).
    rewards_claimed: JSON list of claimed reward IDs (see core/rewards.py).
"""

import json
import logging

from meal_compass.db.database import get_connection

_LOG = logging.getLogger(__name__)


def get_setting(key: str, default: str = None) -> str:
    """Return the value for a settings key, or default if not found."""
    conn = get_connection()
    try:
        row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else default
    finally:
        conn.close()


def set_setting(key: str, value: str) -> None:
    """Insert or update a settings key-value pair (upsert)."""
    conn = get_connection()
    try:
        conn.execute(
            "INSERT INTO settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        conn.commit()
    finally:
        conn.close()


def get_json_setting(key: str, default=None):
    """Decode a JSON-valued setting. Missing or corrupt values return default."""
    raw = get_setting(key)
    if not raw:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        _LOG.warning("setting %r holds invalid JSON, ignoring it", key)
        return default


def set_json_setting(key: str, value) -> None:
    set_setting(key, json.dumps(value))
