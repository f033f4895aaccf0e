import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from blogsite.database import get_db
from blogsite.errors import AuthError, ValidationError
from blogsite.services import auth_service
from blogsite.session import destroy_session, establish_session
from blogsite.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/register")
async def register_form(request: Request):
    return render(request, "register.html", error=None, full_name="", email="")


@router.post("/register")
async def register(
    request: Request,
    full_name: str = Form("", alias="fullName"),
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form("", alias="confirmPassword"),
    db: AsyncSession = Depends(get_db),
):
    try:
        await auth_service.register(db, full_name, email, password, confirm_password)
    except ValidationError as exc:
        return render(request, "register.html", error=exc.message, full_name=full_name, email=email)
    except Exception:
        logger.exception("Unexpected error during registration")
        return PlainTextResponse("Internal Server Error", status_code=500)
    return RedirectResponse("/login", status_code=303)


@router.get("/login")
async def login_form(request: Request):
    return render(request, "login.html", error=None, email="")


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    db: AsyncSession = Depends(get_db),
):
    try:
        ctx = await auth_service.login(db, email, password)
    except AuthError as exc:
        return render(request, "login.html", error=exc.message, email=email)
    establish_session(request, ctx)
    return RedirectResponse("/", status_code=303)


@router.get("/logout")
async def logout(request: Request):
    destroy_session(request)
    return RedirectResponse("/", status_code=302)
