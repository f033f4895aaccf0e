"""
Per-request session context.

The signed session cookie itself is handled by Starlette's
``SessionMiddleware``; this module only reads and writes the two keys the
application stores in it and exposes them as an explicit
``SessionContext`` value that routers pass on to the services.
"""
from dataclasses import dataclass

from starlette.requests import Request

_USER_ID_KEY = "user_id"
_USER_EMAIL_KEY = "user_email"


@dataclass(frozen=True)
class SessionContext:
    user_id: int
    email: str


def current_session(request: Request) -> SessionContext | None:
    """Return the logged-in user's context, or None for anonymous visitors."""
    user_id = request.session.get(_USER_ID_KEY)
    if user_id is None:
        return None
    return SessionContext(user_id=int(user_id), email=request.session.get(_USER_EMAIL_KEY, ""))


def establish_session(request: Request, ctx: SessionContext) -> None:
    request.session.clear()
    request.session[_USER_ID_KEY] = ctx.user_id
    request.session[_USER_EMAIL_KEY] = ctx.email


def destroy_session(request: Request) -> None:
    request.session.clear()
