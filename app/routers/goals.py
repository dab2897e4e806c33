from dataclasses import asdict

from fastapi import APIRouter, Form, HTTPException, Request

from meal_compass.core import goals as goals_core
from meal_compass.core.rewards import REWARD_TYPES, RewardBook, achievements_for, load_claimed, save_claimed

router = APIRouter(tags=["goals"])


def _ledger(request: Request) -> goals_core.GoalLedger:
    return request.app.state.goal_ledger


@router.get("/goals")
def goals_page(request: Request):
    ledger = _ledger(request)
    goals = ledger.goals()
    return {
        "goals": [asdict(g) for g in goals],
        "total_points": ledger.total_points(),
        "achievements": [asdict(a) for a in achievements_for(goals)],
    }


@router.post("/goals")
def goal_create(
    request: Request,
    category: str = Form(...),
    title: str = Form(...),
    target: float = Form(...),
    unit: str = Form(""),
    duration: str = Form("daily"),
    start_date: str = Form(""),
    description: str = Form(""),
):
    title = title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Title is required")
    if target <= 0:
        raise HTTPException(status_code=400, detail="Target must be positive")
    try:
        goal = _ledger(request).create_goal(
            category, title, target,
            unit=unit.strip() or None,
            duration=duration,
            start_date=start_date or None,
            description=description.strip(),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return asdict(goal)


@router.post("/goals/{goal_id}/progress")
def goal_progress(request: Request, goal_id: str, value: float = Form(...)):
    ledger = _ledger(request)
    try:
        goal = ledger.report_progress(goal_id, value)
    except goals_core.GoalNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")
    return {**asdict(goal), "total_points": ledger.total_points()}


@router.delete("/goals/{goal_id}")
def goal_delete(request: Request, goal_id: str):
    try:
        _ledger(request).delete_goal(goal_id)
    except goals_core.GoalNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"deleted": goal_id}


# ── Rewards ────────────────────────────────────────────────────────────────────

@router.get("/rewards")
def rewards_page(request: Request, kind: str = "all", sort: str = "date"):
    if kind != "all" and kind not in REWARD_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown reward type: {kind}")
    book = RewardBook(load_claimed())
    rewards = book.sort_rewards(book.filter_rewards(kind), sort)
    return {
        "total_points": _ledger(request).total_points(),
        "rewards": [asdict(r) for r in rewards],
    }


@router.post("/rewards/{reward_id}/claim")
def reward_claim(reward_id: str):
    book = RewardBook(load_claimed())
    if not book.claim(reward_id):
        raise HTTPException(status_code=404, detail="Reward not found")
    save_claimed(book.claimed_ids)
    return {"claimed": reward_id}
