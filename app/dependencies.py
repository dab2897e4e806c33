import os
from typing import Optional

from itsdangerous import BadData, URLSafeTimedSerializer
from fastapi import Request

from meal_compass.core.profiles import DEFAULT_USER

SESSION_COOKIE = "mc_session"
SESSION_MAX_AGE = 60 * 60 * 24 * 7  # 7 days


def _get_signer() -> URLSafeTimedSerializer:
    key = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
    return URLSafeTimedSerializer(key)


def create_session_token(user_id: str = DEFAULT_USER) -> str:
    return _get_signer().dumps(user_id)


def verify_session_token(token: str) -> Optional[str]:
    """Return the user ID in a valid token, or None if it is forged or expired."""
    try:
        return _get_signer().loads(token, max_age=SESSION_MAX_AGE)
    except BadData:
        return None


def current_user(request: Request) -> Optional[str]:
    token = request.cookies.get(SESSION_COOKIE)
    return verify_session_token(token) if token else None


# Paths that don't require auth. /recipes serves guests the unfiltered catalog.
_PUBLIC_PREFIXES = ("/login", "/recipes")


def is_public(path: str) -> bool:
    return any(path.startswith(p) for p in _PUBLIC_PREFIXES)
