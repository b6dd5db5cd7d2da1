"""Bearer-token principal loading.

Tokens are issued elsewhere; this module only verifies them and exposes the
resulting :class:`Principal` to the views through Flask-Login.
"""
import logging
from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, jsonify
from flask_login import UserMixin, current_user

from errors import Forbidden, Unauthenticated
from extensions import login_manager

logger = logging.getLogger(__name__)

STUDENT_ROLE = "student"


class Principal(UserMixin):
    """Authenticated identity attached to a request."""

    def __init__(self, id, role):
        self.id = id
        self.role = role

    @property
    def is_student(self):
        return self.role == STUDENT_ROLE

    def __eq__(self, other):
        return isinstance(other, Principal) and (self.id, self.role) == (other.id, other.role)

    def __hash__(self):
        return hash((self.id, self.role))

    def __repr__(self):
        return f"<Principal {self.role}:{self.id}>"


def encode_principal(principal_id, role, expires_in=None):
    """Sign a token for ``{id, role}``; used by the seed scripts and tests.

    ``expires_in`` is in seconds and defaults to ``JWT_EXPIRES_IN``.
    """
    if expires_in is None:
        expires_in = current_app.config["JWT_EXPIRES_IN"]
    payload = {
        "id": principal_id,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(
        payload,
        current_app.config["JWT_SECRET"],
        algorithm=current_app.config["JWT_ALGORITHM"],
    )


def decode_principal(token):
    try:
        payload = jwt.decode(
            token,
            current_app.config["JWT_SECRET"],
            algorithms=[current_app.config["JWT_ALGORITHM"]],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired token")
        return None
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected invalid token: %s", exc)
        return None

    principal_id = payload.get("id")
    role = payload.get("role")
    if isinstance(principal_id, bool) or not isinstance(principal_id, int) or not isinstance(role, str):
        logger.debug("Rejected token with malformed claims")
        return None
    return Principal(principal_id, role)


@login_manager.request_loader
def load_principal_from_request(request):
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return decode_principal(token.strip())


@login_manager.unauthorized_handler
def unauthorized():
    # Không phân biệt thiếu token / hết hạn / sai chữ ký
    return jsonify(Unauthenticated().to_dict()), Unauthenticated.status_code


def current_principal():
    if not current_user.is_authenticated:
        raise Unauthenticated()
    return current_user._get_current_object()


def student_required(view):
    """Like ``login_required`` but also restricts the view to student principals."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        if not current_user.is_student:
            raise Forbidden("This resource is only available to students")
        return view(*args, **kwargs)

    return wrapped
