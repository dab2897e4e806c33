from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request

from meal_compass.core.profiles import get_profile, update_profile
from app.dependencies import current_user

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
def profile_page(request: Request):
    return asdict(get_profile(current_user(request)))


@router.post("")
async def profile_update(request: Request):
    """Merge the JSON body's fields over the stored profile."""
    try:
        changes = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Body must be JSON")
    if not isinstance(changes, dict):
        raise HTTPException(status_code=400, detail="Body must be a JSON object")
    try:
        profile = update_profile(current_user(request), **changes)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return asdict(profile)
