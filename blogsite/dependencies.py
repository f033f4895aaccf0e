import json
import logging

from fastapi import Request

from blogsite.errors import LoginRequired
from blogsite.session import SessionContext, current_session

logger = logging.getLogger(__name__)


def require_session(request: Request) -> SessionContext:
    """
    Auth gate for member-only routes.

    Usage in a router::

        @router.get("/post")
        async def post_form(ctx: SessionContext = Depends(require_session)):
            ...

    Raises ``LoginRequired``, which the application turns into a redirect
    to ``/login``.
    """
    ctx = current_session(request)
    if ctx is None:
        raise LoginRequired()
    return ctx


async def request_payload(request: Request) -> dict:
    """
    Return the request body as a plain dict.

    The JSON endpoints are called both by browser forms (url-encoded or
    multipart) and by scripts sending JSON, so both encodings are accepted.
    A body that cannot be decoded is treated as empty; the services then
    report the missing fields.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug("Ignoring undecodable JSON body on %s", request.url.path)
            return {}
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
