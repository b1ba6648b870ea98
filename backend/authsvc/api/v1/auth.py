"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, current_app, g, request

from authsvc.api.deps import get_auth_service, json_response, require_auth, timing
from authsvc.core.extensions import limiter
from authsvc.schemas import (
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from authsvc.services import LoginIn, LogoutIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
token_schema = TokenPairSchema()
user_schema = UserSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Register a new user and return the created representation."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    user = get_auth_service().register(RegisterIn(**payload))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    pair = get_auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    return json_response({"data": token_schema.dump(pair)})


@bp.post("/refresh")
@timing
def refresh():
    """Rotate a refresh token into a fresh pair; the presented one is retired."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    pair = get_auth_service().refresh(RefreshIn(refresh_token=data["refresh_token"]))
    return json_response({"data": token_schema.dump(pair)})


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the bearer access token and the supplied refresh token."""

    data = logout_schema.load(request.get_json(silent=True) or {})
    get_auth_service().logout(
        LogoutIn(access_token=g.access_token, refresh_token=data["refresh_token"])
    )
    return json_response({"data": {"message": "logged out"}})
