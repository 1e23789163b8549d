from functools import wraps

from flask import g, request

from table_service.services import auth_service

AUTH_HEADER = 'x-auth-token'


def session_required(fn):
    """Resolve the x-auth-token header to a user before running the view."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.session_token = request.headers.get(AUTH_HEADER)
        g.user_id = auth_service.resolve(g.session_token)
        return fn(*args, **kwargs)
    return wrapper


def get_session_identity():
    return g.user_id


def get_session_token():
    return g.session_token
