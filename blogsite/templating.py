from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from blogsite.session import current_session

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def render(request: Request, name: str, status_code: int = 200, **context):
    """Render *name* with the logged-in user (or None) available as ``user``."""
    context.setdefault("user", current_session(request))
    return templates.TemplateResponse(request, name, context, status_code=status_code)
