"""
Comment service: append-only comments and replies, and thread assembly.

Comments and replies are public: no session is required and neither can
be edited or deleted.  A post's discussion is read back with one LEFT
OUTER JOIN of ``comment`` and ``reply`` and folded into two-level threads
by ``assemble_threads``.
"""
import logging
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlsplit

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogsite.errors import StoreError, ValidationError
from blogsite.models import Comment, Reply
from blogsite.schemas import CommentCreate, CommentThread, ReplyCreate, ReplyView

logger = logging.getLogger(__name__)

_MISSING_FIELDS = "All required fields must be filled"
_WEBSITE_SCHEMES = ("http", "https")


def _blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value


def _safe_website(value: Optional[str]) -> Optional[str]:
    """Return *value* when it is an absolute http(s) URL, else None."""
    if not value or not value.strip():
        return None
    website = value.strip()
    parts = urlsplit(website)
    if parts.scheme.lower() not in _WEBSITE_SCHEMES or not parts.netloc:
        logger.info("Dropping comment website with unsupported scheme: %r", website[:50])
        return None
    return website


# ---------------------------------------------------------------------------
# Thread assembly
# ---------------------------------------------------------------------------

def assemble_threads(rows: Iterable[Mapping[str, Any]]) -> list[CommentThread]:
    """
    Fold flat comment/reply rows into comment threads.

    Each row is one comment joined with at most one reply (reply keys are
    None when the comment has no replies).  Threads come out in the order
    their comment first appears; replies keep row order.
    """
    threads: dict[int, CommentThread] = {}
    for row in rows:
        thread = threads.get(row["idcomment"])
        if thread is None:
            thread = CommentThread(
                id=row["idcomment"],
                name=row["comment_name"],
                email=row["comment_email"],
                website=row["comment_website"],
                message=row["comment_msg"],
                replies=[],
            )
            threads[row["idcomment"]] = thread

        if row.get("idreply") is not None:
            thread.replies.append(
                ReplyView(
                    id=row["idreply"],
                    name=row["reply_name"],
                    email=row["reply_email"],
                    message=row["reply_msg"],
                )
            )
    return list(threads.values())


async def fetch_threads(db: AsyncSession, blog_id: int) -> list[CommentThread]:
    """Load the discussion for *blog_id*: newest comment first, replies oldest first."""
    q = (
        select(
            Comment.id.label("idcomment"),
            Comment.name.label("comment_name"),
            Comment.email.label("comment_email"),
            Comment.website.label("comment_website"),
            Comment.message.label("comment_msg"),
            Reply.id.label("idreply"),
            Reply.name.label("reply_name"),
            Reply.email.label("reply_email"),
            Reply.message.label("reply_msg"),
        )
        .outerjoin(Reply, Reply.comment_id == Comment.id)
        .where(Comment.blog_id == blog_id)
        .order_by(Comment.id.desc(), Reply.id.asc())
    )
    result = await db.execute(q)
    return assemble_threads(result.mappings().all())


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

async def add_comment(db: AsyncSession, data: CommentCreate) -> int:
    """Store a comment on a post and return its id."""
    if any(
        _blank(v)
        for v in (data.idblog, data.comment_name, data.comment_email, data.comment_msg)
    ):
        raise ValidationError(_MISSING_FIELDS, code=ValidationError.MISSING_FIELDS)

    comment = Comment(
        blog_id=data.idblog,
        name=data.comment_name,
        email=data.comment_email,
        website=_safe_website(data.comment_website),
        message=data.comment_msg,
    )
    try:
        db.add(comment)
        await db.flush()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error adding comment: %s", exc)
        raise StoreError("Error adding comment") from exc
    return comment.id


async def add_reply(db: AsyncSession, data: ReplyCreate) -> int:
    """Store a reply to a comment and return its id."""
    if any(
        _blank(v)
        for v in (data.idcomment, data.reply_name, data.reply_email, data.reply_msg)
    ):
        raise ValidationError(_MISSING_FIELDS, code=ValidationError.MISSING_FIELDS)

    reply = Reply(
        comment_id=data.idcomment,
        name=data.reply_name,
        email=data.reply_email,
        message=data.reply_msg,
    )
    try:
        db.add(reply)
        await db.flush()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error adding reply: %s", exc)
        raise StoreError("Error adding reply") from exc
    return reply.id
