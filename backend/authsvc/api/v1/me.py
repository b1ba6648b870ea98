"""Current-user endpoint."""

from __future__ import annotations

from flask import Blueprint, g

from authsvc.api.deps import get_auth_service, json_response, require_auth, timing
from authsvc.schemas import UserSchema

bp = Blueprint("me", __name__)

user_schema = UserSchema()


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the profile of the authenticated user."""

    user = get_auth_service().get_me(g.user_id)
    return json_response({"data": user_schema.dump(user)})
