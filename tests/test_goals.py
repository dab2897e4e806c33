import pytest

from meal_compass.core.goals import (
    COMPLETED,
    IN_PROGRESS,
    GoalLedger,
    GoalNotFoundError,
    MemoryGoalStore,
    SettingsGoalStore,
    end_date_for,
)


@pytest.fixture
def ledger():
    return GoalLedger(MemoryGoalStore())


# ── end dates ────────────────────────────────────────────────────────
def test_end_date_for_each_duration():
    assert end_date_for("2024-12-28", "daily") == "2024-12-29"
    assert end_date_for("2024-12-28", "weekly") == "2025-01-04"
    assert end_date_for("2024-03-15", "monthly") == "2024-04-15"
    assert end_date_for("2024-11-15", "quarterly") == "2025-02-15"


def test_month_arithmetic_clamps_to_month_end():
    assert end_date_for("2024-01-31", "monthly") == "2024-02-29"
    assert end_date_for("2023-11-30", "quarterly") == "2024-02-29"
    assert end_date_for("2025-11-30", "quarterly") == "2026-02-28"


def test_unknown_duration_raises():
    with pytest.raises(ValueError):
        end_date_for("2024-01-01", "yearly")


# ── create ───────────────────────────────────────────────────────────
def test_create_goal_defaults(ledger):
    goal = ledger.create_goal("hydration", "Drink water", 2, start_date="2024-05-01")
    assert goal.status == IN_PROGRESS
    assert goal.unit == "litres"
    assert goal.end_date == "2024-05-02"
    assert goal.current_progress == 0
    assert goal.points == 100
    assert ledger.goals() == [goal]


def test_create_goal_rejects_unknown_category(ledger):
    with pytest.raises(ValueError):
        ledger.create_goal("sleep", "Sleep more", 8)


# ── progress ─────────────────────────────────────────────────────────
def test_reaching_target_completes_and_awards_points(ledger):
    goal = ledger.create_goal("nutrition", "Eat vegetables", 8)
    ledger.report_progress(goal.id, 8)
    assert goal.status == COMPLETED
    assert ledger.total_points() == 100


def test_lower_report_does_not_reopen_a_completed_goal(ledger):
    goal = ledger.create_goal("nutrition", "Eat vegetables", 8)
    ledger.report_progress(goal.id, 8)
    ledger.report_progress(goal.id, 5)
    assert goal.current_progress == 5
    assert goal.status == COMPLETED
    assert ledger.total_points() == 100


def test_progress_is_set_not_added(ledger):
    goal = ledger.create_goal("hydration", "Drink water", 3)
    ledger.report_progress(goal.id, 2)
    ledger.report_progress(goal.id, 2)
    assert goal.current_progress == 2
    assert goal.status == IN_PROGRESS
    assert ledger.total_points() == 0


def test_total_points_sums_completed_goals_only(ledger):
    done = ledger.create_goal("nutrition", "A", 1, points=50)
    ledger.create_goal("nutrition", "B", 1, points=70)
    ledger.report_progress(done.id, 1)
    assert ledger.total_points() == 50


def test_unknown_goal_raises_lookup_error(ledger):
    with pytest.raises(GoalNotFoundError):
        ledger.report_progress("missing", 1)
    with pytest.raises(LookupError):
        ledger.delete_goal("missing")


def test_delete_goal_removes_its_points(ledger):
    goal = ledger.create_goal("nutrition", "A", 1)
    ledger.report_progress(goal.id, 1)
    ledger.delete_goal(goal.id)
    assert ledger.goals() == []
    assert ledger.total_points() == 0


# ── stores ───────────────────────────────────────────────────────────
def test_every_mutation_is_saved_to_the_store():
    store = MemoryGoalStore()
    ledger = GoalLedger(store)
    goal = ledger.create_goal("nutrition", "A", 4)
    ledger.report_progress(goal.id, 4)
    reloaded = GoalLedger(store)
    assert reloaded.get(goal.id).status == COMPLETED


def test_settings_store_round_trip(tmp_db):
    ledger = GoalLedger(SettingsGoalStore())
    goal = ledger.create_goal("hydration", "Drink water", 2, description="8 glasses")
    ledger.report_progress(goal.id, 2)
    reloaded = GoalLedger(SettingsGoalStore())
    assert reloaded.goals() == ledger.goals()
    assert reloaded.total_points() == 100


def test_settings_store_ignores_corrupt_json(tmp_db):
    from meal_compass.config import set_setting
    set_setting("goals", "{not json")
    assert SettingsGoalStore().load() == []


# ── HTTP ─────────────────────────────────────────────────────────────
def test_goals_page(authed_client):
    resp = authed_client.get("/goals")
    assert resp.status_code == 200
    data = resp.json()
    assert "total_points" in data
    assert [a["id"] for a in data["achievements"]] == ["achievement_1", "achievement_2"]


def test_goal_create_progress_and_delete(authed_client):
    resp = authed_client.post("/goals", data={
        "category": "nutrition", "title": "Eat vegetables", "target": "8", "start_date": "2030-01-01",
    })
    assert resp.status_code == 200
    goal = resp.json()
    assert goal["unit"] == "servings"
    assert goal["end_date"] == "2030-01-02"
    points_before = authed_client.get("/goals").json()["total_points"]

    resp = authed_client.post(f"/goals/{goal['id']}/progress", data={"value": "8"})
    assert resp.json()["status"] == "completed"
    assert resp.json()["total_points"] == points_before + 100

    resp = authed_client.post(f"/goals/{goal['id']}/progress", data={"value": "5"})
    assert resp.json()["status"] == "completed"

    assert authed_client.delete(f"/goals/{goal['id']}").status_code == 200
    assert authed_client.delete(f"/goals/{goal['id']}").status_code == 404


def test_goal_create_validation(authed_client):
    base = {"category": "hydration", "title": "Drink water", "target": "2"}
    assert authed_client.post("/goals", data={**base, "title": "   "}).status_code == 400
    assert authed_client.post("/goals", data={**base, "target": "0"}).status_code == 400
    assert authed_client.post("/goals", data={**base, "category": "sleep"}).status_code == 400
    assert authed_client.post("/goals", data={**base, "duration": "yearly"}).status_code == 400


def test_goal_progress_unknown_goal(authed_client):
    resp = authed_client.post("/goals/missing/progress", data={"value": "1"})
    assert resp.status_code == 404


def test_rewards_listing_and_claim(authed_client):
    resp = authed_client.get("/rewards", params={"sort": "points"})
    assert resp.status_code == 200
    assert [r["points_cost"] for r in resp.json()["rewards"]] == [200, 300, 1000]

    assert authed_client.post("/rewards/reward_3/claim").status_code == 200
    badges = authed_client.get("/rewards", params={"kind": "badge"}).json()["rewards"]
    assert [(r["id"], r["unlocked"]) for r in badges] == [("reward_3", True)]

    assert authed_client.post("/rewards/reward_99/claim").status_code == 404
    assert authed_client.get("/rewards", params={"kind": "voucher"}).status_code == 400
