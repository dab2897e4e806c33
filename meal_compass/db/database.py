"""SQLite database connection management and schema initialization.

Provides a single-file database at ~/.meal_compass/meal_compass.db.
Every public function that needs a connection should call get_connection(),
use it, and close it in a finally block.
"""

import os
import sqlite3
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path

_db_path_override: ContextVar["Path | None"] = ContextVar("_db_path_override", default=None)


@contextmanager
def override_db_path(path: "Path"):
    """Context manager to override the DB path for the current async task/thread.

    Example:
        with override_db_path(tmp_path / "test.db"):
            init_db()
            recipes = recipes_core.get_all()
    """
    token = _db_path_override.set(path)
    try:
        yield
    finally:
        _db_path_override.reset(token)


def get_db_path() -> Path:
    """Return the active DB path.

    Priority order:
    1. ContextVar override (tests, one-off scripts)
    2. DB_PATH environment variable (Docker / local dev)
    3. Default ~/.meal_compass/meal_compass.db
    """
    override = _db_path_override.get()
    if override is not None:
        return override
    env_path = os.environ.get("DB_PATH")
    if env_path:
        p = Path(env_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    db_dir = Path.home() / ".meal_compass"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "meal_compass.db"


def get_connection(db_path: Path = None) -> sqlite3.Connection:
    """Return a new SQLite connection with Row factory and foreign keys enabled.

    Callers are responsible for closing the connection when done.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: Path = None) -> None:
    """Create all tables if they don't already exist.

    Called once at application startup from app/main.py.
    Tables: recipes, recipe_ingredients, recipe_instructions,
    health_profiles, settings.
    """
    conn = get_connection(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS recipes (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                name         TEXT NOT NULL,
                description  TEXT,
                servings     INTEGER NOT NULL DEFAULT 2 CHECK (servings > 0),
                prep_time    INTEGER DEFAULT 0,
                cook_time    INTEGER DEFAULT 0,
                difficulty   TEXT DEFAULT 'beginner'
                             CHECK (difficulty IN ('beginner', 'intermediate', 'advanced')),
                cuisine      TEXT,
                health_score INTEGER DEFAULT 0,
                likes        INTEGER DEFAULT 0,
                vegetarian   INTEGER DEFAULT 0,
                vegan        INTEGER DEFAULT 0,
                gluten_free  INTEGER DEFAULT 0,
                dairy_free   INTEGER DEFAULT 0,
                pescetarian  INTEGER DEFAULT 0,
                high_protein INTEGER DEFAULT 0,
                high_fibre   INTEGER DEFAULT 0,
                calories     REAL DEFAULT 0,
                protein      REAL DEFAULT 0,
                carbs        REAL DEFAULT 0,
                fat          REAL DEFAULT 0,
                fiber        REAL DEFAULT 0,
                sugar        REAL DEFAULT 0,
                saturated_fat REAL,
                sodium       REAL,
                created_at   TEXT DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS recipe_ingredients (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                recipe_id    INTEGER NOT NULL REFERENCES recipes(id) ON DELETE CASCADE,
                position     INTEGER NOT NULL,
                name         TEXT NOT NULL,
                amount       REAL NOT NULL,
                unit         TEXT,
                notes        TEXT,
                substitutes  TEXT,
                product_name TEXT,
                price        TEXT,
                promoted     INTEGER DEFAULT 0
            );

            CREATE TABLE IF NOT EXISTS recipe_instructions (
                id        INTEGER PRIMARY KEY AUTOINCREMENT,
                recipe_id INTEGER NOT NULL REFERENCES recipes(id) ON DELETE CASCADE,
                step      INTEGER NOT NULL,
                text      TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS health_profiles (
                user_id                 TEXT PRIMARY KEY,
                diet_type               TEXT NOT NULL,
                restrictions            TEXT,
                allergies               TEXT,
                custom_restrictions     TEXT,
                nutritional_preferences TEXT,
                is_on_glp1              INTEGER DEFAULT 0,
                caloric_target          INTEGER,
                cooking_time_max        INTEGER,
                skill_level             TEXT,
                servings_default        INTEGER,
                updated_at              TEXT DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS settings (
                key   TEXT PRIMARY KEY,
                value TEXT
            );
        """)
        conn.commit()
    finally:
        conn.close()
