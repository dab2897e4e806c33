"""Health profile storage: one profile per user, defaulted when absent.

update_profile() merges the given fields over the stored (or default)
profile and writes the whole row back in one statement. List fields are
stored as JSON text.
"""

import json
import logging
from dataclasses import asdict, fields

from meal_compass.db.database import get_connection
from meal_compass.db.models import HealthProfile, NutritionalPreference

_LOG = logging.getLogger(__name__)

DEFAULT_USER = "local-user"

DIET_TYPES = ["omnivore", "vegetarian", "vegan", "pescatarian"]
RESTRICTIONS = ["gluten-free", "dairy-free", "nut-free", "kosher", "halal"]
SKILL_LEVELS = ["beginner", "intermediate", "advanced"]

_LIST_FIELDS = ("restrictions", "allergies", "custom_restrictions")
_PROFILE_FIELDS = {f.name for f in fields(HealthProfile)}


def default_profile() -> HealthProfile:
    return HealthProfile(
        diet_type="omnivore",
        nutritional_preferences=[
            NutritionalPreference(
                id="high-protein", label="High Protein",
                description="Prioritize high protein foods", enabled=True, locked=True,
            ),
            NutritionalPreference(
                id="high-fiber", label="High Fiber",
                description="Focus on fiber-rich foods", enabled=True, locked=True,
            ),
        ],
        caloric_target=2000,
        cooking_time_max=45,
        skill_level="intermediate",
        servings_default=2,
    )


def _coerce_preferences(prefs) -> list[NutritionalPreference]:
    return [p if isinstance(p, NutritionalPreference) else NutritionalPreference(**p) for p in prefs]


def _row_to_profile(row) -> HealthProfile:
    base = default_profile()
    try:
        prefs = json.loads(row["nutritional_preferences"]) if row["nutritional_preferences"] else None
        lists = {f: json.loads(row[f]) if row[f] else [] for f in _LIST_FIELDS}
    except json.JSONDecodeError:
        _LOG.warning("profile for %r holds invalid JSON, using defaults", row["user_id"])
        return base
    return HealthProfile(
        diet_type=row["diet_type"] or base.diet_type,
        nutritional_preferences=_coerce_preferences(prefs) if prefs is not None else base.nutritional_preferences,
        is_on_glp1=bool(row["is_on_glp1"]),
        caloric_target=row["caloric_target"],
        cooking_time_max=row["cooking_time_max"],
        skill_level=row["skill_level"],
        servings_default=row["servings_default"],
        **lists,
    )


def get_profile(user_id: str = DEFAULT_USER) -> HealthProfile:
    """Return the user's profile, or the default profile if none is stored."""
    conn = get_connection()
    try:
        row = conn.execute(
            "SELECT * FROM health_profiles WHERE user_id = ?", (user_id,)
        ).fetchone()
        return _row_to_profile(row) if row else default_profile()
    finally:
        conn.close()


def update_profile(user_id: str = DEFAULT_USER, **changes) -> HealthProfile:
    """Merge changes over the current profile and store the result (upsert).

    Raises ValueError for unknown field names, out-of-range enum values, or
    list fields given as anything but a list. Fields stored as NULL read back
    as None; defaults only apply when the user has no stored row.
    """
    unknown = set(changes) - _PROFILE_FIELDS
    if unknown:
        raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    if "diet_type" in changes and changes["diet_type"] not in DIET_TYPES:
        raise ValueError(f"Unknown diet type: {changes['diet_type']!r}")
    if changes.get("skill_level") is not None and changes["skill_level"] not in SKILL_LEVELS:
        raise ValueError(f"Unknown skill level: {changes['skill_level']!r}")
    for name in _LIST_FIELDS:
        if name in changes and not isinstance(changes[name], list):
            raise ValueError(f"{name} must be a list")
    if "nutritional_preferences" in changes:
        changes["nutritional_preferences"] = _coerce_preferences(changes["nutritional_preferences"])

    profile = HealthProfile(**{**asdict(get_profile(user_id)), **changes})
    profile.nutritional_preferences = _coerce_preferences(profile.nutritional_preferences)

    conn = get_connection()
    try:
        conn.execute(
            """INSERT INTO health_profiles (user_id, diet_type, restrictions, allergies,
               custom_restrictions, nutritional_preferences, is_on_glp1, caloric_target,
               cooking_time_max, skill_level, servings_default, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
               ON CONFLICT(user_id) DO UPDATE SET
                 diet_type=excluded.diet_type, restrictions=excluded.restrictions,
                 allergies=excluded.allergies, custom_restrictions=excluded.custom_restrictions,
                 nutritional_preferences=excluded.nutritional_preferences,
                 is_on_glp1=excluded.is_on_glp1, caloric_target=excluded.caloric_target,
                 cooking_time_max=excluded.cooking_time_max, skill_level=excluded.skill_level,
                 servings_default=excluded.servings_default, updated_at=CURRENT_TIMESTAMP""",
            (
                user_id, profile.diet_type,
                json.dumps(list(profile.restrictions)),
                json.dumps(list(profile.allergies)),
                json.dumps(list(profile.custom_restrictions)),
                json.dumps([asdict(p) for p in profile.nutritional_preferences]),
                int(bool(profile.is_on_glp1)), profile.caloric_target,
                profile.cooking_time_max, profile.skill_level, profile.servings_default,
            ),
        )
        conn.commit()
    finally:
        conn.close()
    return profile
