import os
from fastapi import APIRouter, Form
from fastapi.responses import JSONResponse, RedirectResponse
from app.dependencies import create_session_token, SESSION_COOKIE, SESSION_MAX_AGE

router = APIRouter(tags=["auth"])


def _app_password() -> str:
    """Read APP_PASSWORD at call time so tests can set it via env."""
    return os.environ.get("APP_PASSWORD", "")


@router.get("/")
async def root():
    return RedirectResponse(url="/recipes", status_code=302)


@router.get("/login")
async def login_page():
    return {"detail": "POST the app password as form field 'password' to log in"}


@router.post("/login")
async def login(password: str = Form(...)):
    if password and password == _app_password():
        resp = RedirectResponse(url="/recipes", status_code=302)
        resp.set_cookie(
            SESSION_COOKIE,
            create_session_token(),
            httponly=True,
            samesite="lax",
            max_age=SESSION_MAX_AGE,
        )
        return resp
    return JSONResponse({"error": "Invalid password"}, status_code=401)


@router.post("/logout")
async def logout():
    resp = RedirectResponse(url="/login", status_code=302)
    resp.delete_cookie(SESSION_COOKIE)
    return resp
