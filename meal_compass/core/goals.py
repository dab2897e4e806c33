"""Nutrition and hydration goals: creation, progress reports, and points.

A goal moves from 'in_progress' to 'completed' the first time reported
progress reaches its target. The move is one-way: a later, lower report
updates current_progress but leaves the goal completed.
TODO: product review of the one-way completion; lowering progress arguably
should re-open the goal.

Points are never stored on their own. total_points() re-sums the points of
completed goals every time it is asked.

Goals are kept by a GoalStore (load/save); SettingsGoalStore writes them as
JSON into the settings table, MemoryGoalStore keeps them in process.
"""

import calendar
import logging
import uuid
from dataclasses import asdict
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Protocol, Union

from meal_compass.config import get_json_setting, set_json_setting
from meal_compass.db.models import Goal

_LOG = logging.getLogger(__name__)

GOAL_CATEGORIES = ["nutrition", "hydration"]
GOAL_DURATIONS = ["daily", "weekly", "monthly", "quarterly"]
IN_PROGRESS = "in_progress"
COMPLETED = "completed"

DEFAULT_POINTS = 100
_SETTINGS_KEY = "goals"


class GoalNotFoundError(LookupError):
    """Raised when a goal ID does not exist in the ledger."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _add_months(d: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def end_date_for(start_date: Union[date, str], duration: str) -> str:
    """Return the ISO end date of a goal starting on start_date."""
    start = start_date if isinstance(start_date, date) else date.fromisoformat(start_date)
    if duration == "daily":
        end = start + timedelta(days=1)
    elif duration == "weekly":
        end = start + timedelta(days=7)
    elif duration == "monthly":
        end = _add_months(start, 1)
    elif duration == "quarterly":
        end = _add_months(start, 3)
    else:
        raise ValueError(f"Unknown goal duration: {duration!r}")
    return end.isoformat()


def default_unit(category: str) -> str:
    return "litres" if category == "hydration" else "servings"


class GoalStore(Protocol):
    def load(self) -> list[Goal]: ...

    def save(self, goals: list[Goal]) -> None: ...


class MemoryGoalStore:
    """Keeps goals in process memory. Used by tests and guest sessions."""

    def __init__(self, goals: list[Goal] = None):
        self._goals = list(goals or [])

    def load(self) -> list[Goal]:
        return list(self._goals)

    def save(self, goals: list[Goal]) -> None:
        self._goals = list(goals)


class SettingsGoalStore:
    """Persists goals as a JSON list under the 'goals' settings key."""

    def load(self) -> list[Goal]:
        data = get_json_setting(_SETTINGS_KEY, [])
        try:
            return [Goal(**entry) for entry in data]
        except TypeError:
            _LOG.warning("stored goals have an unexpected shape, starting empty")
            return []

    def save(self, goals: list[Goal]) -> None:
        set_json_setting(_SETTINGS_KEY, [asdict(goal) for goal in goals])


class GoalLedger:
    """Owns the goal list and writes every change through to its store."""

    def __init__(self, store: GoalStore):
        self._store = store
        self._goals: list[Goal] = store.load()

    def goals(self) -> list[Goal]:
        return list(self._goals)

    def get(self, goal_id: str) -> Optional[Goal]:
        return next((g for g in self._goals if g.id == goal_id), None)

    def _require(self, goal_id: str) -> Goal:
        goal = self.get(goal_id)
        if goal is None:
            raise GoalNotFoundError(f"Goal not found: {goal_id}")
        return goal

    def create_goal(
        self,
        category: str,
        title: str,
        target: float,
        unit: str = None,
        duration: str = "daily",
        start_date: Union[date, str, None] = None,
        description: str = "",
        current_progress: float = 0,
        points: int = DEFAULT_POINTS,
    ) -> Goal:
        """Create an in-progress goal. The end date is derived from start_date and duration."""
        if category not in GOAL_CATEGORIES:
            raise ValueError(f"Unknown goal category: {category!r}")
        start = start_date or date.today()
        start_iso = start if isinstance(start, str) else start.isoformat()
        now = _now()
        goal = Goal(
            id=str(uuid.uuid4()),
            category=category,
            title=title,
            description=description,
            target=target,
            unit=unit or default_unit(category),
            duration=duration,
            start_date=start_iso,
            end_date=end_date_for(start_iso, duration),
            current_progress=current_progress or 0,
            status=IN_PROGRESS,
            points=points,
            created_at=now,
            updated_at=now,
        )
        self._goals.append(goal)
        self._store.save(self._goals)
        _LOG.debug("created %s goal %r", category, title)
        return goal

    def report_progress(self, goal_id: str, value: float) -> Goal:
        """Set current progress to value (not an increment) and complete the goal on reaching target."""
        goal = self._require(goal_id)
        goal.current_progress = value
        if goal.status != COMPLETED and value >= goal.target:
            goal.status = COMPLETED
            _LOG.debug("goal %r completed (+%d points)", goal.title, goal.points)
        goal.updated_at = _now()
        self._store.save(self._goals)
        return goal

    def delete_goal(self, goal_id: str) -> None:
        self._require(goal_id)
        self._goals = [g for g in self._goals if g.id != goal_id]
        self._store.save(self._goals)

    def total_points(self) -> int:
        return sum(g.points for g in self._goals if g.status == COMPLETED)
