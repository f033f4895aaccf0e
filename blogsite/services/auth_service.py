"""
Auth service: registration and login for the User aggregate.

Registration checks run in a fixed order and stop at the first failure so
the form can show exactly one message.  bcrypt work is pushed to a worker
thread with ``run_in_threadpool`` to keep the event loop responsive.
"""
import logging
import re

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from blogsite.errors import AuthError, AuthFailure, ValidationError
from blogsite.models import User
from blogsite.security import hash_password, verify_password
from blogsite.session import SessionContext

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 7


def split_full_name(full_name: str) -> tuple[str, str]:
    """Split *full_name* into (first name, remaining names)."""
    parts = full_name.strip().split(" ")
    return parts[0], " ".join(parts[1:])


def validate_registration(
    full_name: str, email: str, password: str, confirm_password: str
) -> None:
    """Raise ValidationError for the first rule the form input breaks."""
    if " " not in full_name:
        raise ValidationError("Full name must include first and last name.")
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be longer than 6 characters.")
    if password != confirm_password:
        raise ValidationError("Passwords do not match.")


async def register(
    db: AsyncSession,
    full_name: str,
    email: str,
    password: str,
    confirm_password: str,
) -> int:
    """
    Create a user account and return the new user id.

    A duplicate email and any other database failure are reported with the
    same message; the caller cannot tell them apart.
    """
    validate_registration(full_name, email, password, confirm_password)

    password_hash = await run_in_threadpool(hash_password, password)
    first_name, last_name = split_full_name(full_name)

    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=password_hash,
    )
    try:
        db.add(user)
        await db.flush()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("Registration failed for %s: %s", email, exc)
        raise ValidationError("Email already exists or database error.") from exc

    logger.info("Registered user id=%s", user.id)
    return user.id


async def login(db: AsyncSession, email: str, password: str) -> SessionContext:
    """Verify *email* / *password* and return the session context to establish."""
    try:
        result = await db.execute(select(User).where(User.email == email).limit(1))
        user = result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.error("Login lookup failed: %s", exc)
        raise AuthError(AuthFailure.STORE_FAILURE, "Database error.") from exc

    if user is None:
        raise AuthError(AuthFailure.EMAIL_NOT_FOUND, "Email not found.")

    if not await run_in_threadpool(verify_password, password, user.password_hash):
        raise AuthError(AuthFailure.BAD_PASSWORD, "Incorrect password.")

    logger.info("User id=%s logged in", user.id)
    return SessionContext(user_id=user.id, email=user.email)
