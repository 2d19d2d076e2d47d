"""
Authentication decorators

The current user comes from a JWT access token when one is sent, otherwise
from the user id header set by the frontend.
"""
from functools import wraps

from flask import current_app, g, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from extensions import db
from app.models.user import User
from app.utils.exceptions import Forbidden, Unauthorized


def get_current_user():
    """Resolve the requesting user, or None when no identity was sent"""
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as e:
        raise Unauthorized('Invalid or expired token') from e

    identity = get_jwt_identity() or request.headers.get(current_app.config['USER_ID_HEADER'])
    if not identity:
        return None

    try:
        user_id = int(identity)
    except (TypeError, ValueError):
        raise Unauthorized('Invalid user')

    user = db.session.get(User, user_id)
    if user is None:
        raise Unauthorized('Invalid user')
    return user


def optional_user():
    """Attach the user to ``g.current_user`` if one was identified"""
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            g.current_user = get_current_user()
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def user_required():
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            user = get_current_user()
            if user is None:
                raise Unauthorized('Authentication required')
            g.current_user = user
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def admin_required():
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            user = get_current_user()
            if user is None:
                raise Unauthorized('Authentication required')
            if not user.is_admin:
                raise Forbidden('Admin access required')
            g.current_user = user
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def ensure_self_or_admin(user_id):
    """Raise Forbidden unless the current user is ``user_id`` or an admin"""
    user = g.current_user
    if user.id != user_id and not user.is_admin:
        raise Forbidden('You can only access your own records')
