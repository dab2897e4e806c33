import logging
import os
from contextlib import asynccontextmanager
from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from meal_compass.db.database import init_db
from meal_compass.core import recipes as recipes_core
from meal_compass.core.goals import GoalLedger, SettingsGoalStore
from meal_compass.core.meal_plan import MealPlanSchedule
from meal_compass.core.shopping_list import ShoppingList
from app.dependencies import current_user, is_public
from app.routers import auth, recipes, profile, meal_plan, shopping, goals

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if os.environ.get("SEED_CATALOG", "").lower() in ("1", "true", "yes"):
        from demo.seed import seed_if_empty
        seed_if_empty()
    # One planning session per process; the UI issues one mutation at a time.
    app.state.schedule = MealPlanSchedule(recipes_core.get)
    app.state.shopping_list = ShoppingList()
    app.state.goal_ledger = GoalLedger(SettingsGoalStore())
    yield


app = FastAPI(title="Meal Compass", lifespan=lifespan)


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    if not is_public(request.url.path) and current_user(request) is None:
        return RedirectResponse(url="/login", status_code=302)
    return await call_next(request)


app.include_router(auth.router)
app.include_router(recipes.router)
app.include_router(profile.router)
app.include_router(meal_plan.router)
app.include_router(shopping.router)
app.include_router(goals.router)
