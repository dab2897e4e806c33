from dataclasses import asdict
from datetime import date, timedelta

from fastapi import APIRouter, Form, HTTPException, Request

from meal_compass.core import meal_plan as mp_core
from meal_compass.db.models import MealPlanItem

router = APIRouter(prefix="/meal-plan", tags=["meal_plan"])


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        raise HTTPException(status_code=400, detail=f"Invalid date: {value!r}")


def _parse_week(week_str: str = None) -> date:
    """The plan shows seven days starting at week, or starting today."""
    if week_str:
        try:
            return date.fromisoformat(week_str)
        except (ValueError, TypeError):
            pass
    return date.today()


def _item_json(item: MealPlanItem) -> dict:
    return {
        "id": item.id,
        "recipe_id": item.recipe.id,
        "recipe_name": item.recipe.name,
        "date": item.date,
        "day_of_week": item.day_of_week,
        "meal_type": item.meal_type,
        "servings": item.servings,
        "notes": item.notes,
    }


def _week_context(schedule: mp_core.MealPlanSchedule, week_start: date) -> dict:
    grid = schedule.week(week_start)
    return {
        "week_start": week_start.isoformat(),
        "prev_week": (week_start - timedelta(days=7)).isoformat(),
        "next_week": (week_start + timedelta(days=7)).isoformat(),
        "meal_types": mp_core.MEAL_TYPES,
        "days": [
            {
                "date": day,
                "day_of_week": mp_core.day_of_week(day),
                "meals": {
                    meal_type: _item_json(item) if item else None
                    for meal_type, item in slots.items()
                },
            }
            for day, slots in grid.items()
        ],
    }


# ── Grid ───────────────────────────────────────────────────────────────────────

@router.get("")
def meal_plan_page(request: Request, week: str = None):
    return _week_context(request.app.state.schedule, _parse_week(week))


@router.get("/summary")
def meal_plan_summary(request: Request):
    return asdict(mp_core.summarize(request.app.state.schedule.items))


# ── Add / move / delete ────────────────────────────────────────────────────────

@router.post("/add")
def meal_add(
    request: Request,
    recipe_id: int = Form(...),
    date: str = Form(...),
    meal_type: str = Form(...),
    servings: int = Form(1),
    notes: str = Form(""),
):
    entry_date = _parse_date(date)
    if servings <= 0:
        raise HTTPException(status_code=400, detail="Servings must be positive")
    if meal_type not in mp_core.MEAL_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown meal type: {meal_type}")
    item = request.app.state.schedule.add_meal(recipe_id, entry_date, meal_type, servings, notes.strip())
    if item is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return _item_json(item)


@router.post("/move")
def meal_move(
    request: Request,
    from_date: str = Form(...),
    to_date: str = Form(...),
    meal_id: str = Form(...),
):
    schedule = request.app.state.schedule
    schedule.move_meal(_parse_date(from_date), _parse_date(to_date), meal_id)
    item = schedule.get(meal_id)
    return _item_json(item) if item else {}


@router.delete("/{meal_id}")
def meal_delete(request: Request, meal_id: str):
    request.app.state.schedule.delete_meal(meal_id)
    return {"deleted": meal_id}
