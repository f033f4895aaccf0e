"""
Blog service: listing, reading and creating posts.

Design notes
------------
- Every read joins ``blog`` with ``category`` and ``users`` through LEFT
  OUTER JOINs so a post whose category or author row is missing is still
  returned, with nulls in the joined columns.
- Category rows are created lazily: ``create_post`` checks for the row
  and inserts it with its canonical title before inserting the post.
  The check and the insert are not atomic; when two requests race on the
  same new category, the loser's duplicate-key error is reported as a
  StoreError rather than retried.
- Service functions flush but do not commit; the transaction boundary is
  owned by the ``get_db`` dependency.  On a database error the session is
  rolled back before StoreError is raised so that boundary stays usable.
"""
import logging
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogsite.categories import Category as KnownCategory
from blogsite.config import settings
from blogsite.errors import NotFoundError, StoreError, ValidationError
from blogsite.models import BlogPost, Category, User
from blogsite.schemas import BlogPostView, CategoryView, CommentThread, PostCreate
from blogsite.services import comment_service
from blogsite.session import SessionContext

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _post_query():
    return (
        select(
            BlogPost,
            Category.title.label("category_title"),
            User.first_name.label("author_first_name"),
            User.last_name.label("author_last_name"),
        )
        .outerjoin(Category, BlogPost.category_id == Category.id)
        .outerjoin(User, BlogPost.user_id == User.id)
    )


def _row_to_view(row: Any) -> BlogPostView:
    post: BlogPost = row.BlogPost
    return BlogPostView(
        id=post.id,
        title=post.title,
        body=post.body,
        image=post.image,
        author_display=post.author_display,
        created_at=post.created_at,
        category_id=post.category_id,
        tag=post.tag,
        user_id=post.user_id,
        category_title=row.category_title,
        author_first_name=row.author_first_name,
        author_last_name=row.author_last_name,
    )


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def split_featured(
    posts: Sequence[BlogPostView],
) -> tuple[BlogPostView | None, list[BlogPostView]]:
    """Split a feed into the featured (newest) post and the rest."""
    if not posts:
        return None, []
    return posts[0], list(posts[1:])


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def list_recent(db: AsyncSession, limit: int | None = None) -> list[BlogPostView]:
    """Return at most *limit* posts, newest first."""
    limit = settings.FEED_LIMIT if limit is None else limit
    q = (
        _post_query()
        .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        .limit(limit)
    )
    try:
        result = await db.execute(q)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error fetching blogs: %s", exc)
        raise StoreError("Error fetching blogs") from exc
    return [_row_to_view(row) for row in result.all()]


async def list_categories(db: AsyncSession) -> list[CategoryView]:
    """Return stored categories; an empty list when the query fails."""
    try:
        result = await db.execute(select(Category).order_by(Category.id))
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("Error fetching categories: %s", exc)
        return []
    return [CategoryView.model_validate(c) for c in result.scalars().all()]


async def create_post(db: AsyncSession, ctx: SessionContext, data: PostCreate) -> int:
    """
    Create a post authored by the session user and return its id.

    The category name is resolved before anything is written, so an
    unknown category never leaves a row behind.
    """
    if _blank(data.title) or _blank(data.content) or _blank(data.category):
        raise ValidationError(
            "Invalid input. Ensure title, content, and a valid category are provided.",
            code=ValidationError.MISSING_FIELDS,
        )

    known = KnownCategory.from_name(data.category)
    if known is None:
        raise ValidationError(
            "Invalid category selected.", code=ValidationError.UNKNOWN_CATEGORY
        )

    await _ensure_category(db, known)

    post = BlogPost(
        title=data.title,
        body=data.content,
        image=data.blog_image or None,
        author_display=ctx.email or "Unknown",
        category_id=known.category_id,
        tag=data.blog_tag or None,
        user_id=ctx.user_id,
    )
    try:
        db.add(post)
        await db.flush()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error creating blog post: %s", exc)
        raise StoreError("Error creating blog post") from exc

    logger.info("User id=%s created post id=%s", ctx.user_id, post.id)
    return post.id


async def _ensure_category(db: AsyncSession, known: KnownCategory) -> None:
    try:
        result = await db.execute(select(Category.id).where(Category.id == known.category_id))
        exists = result.scalar_one_or_none() is not None
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error checking category: %s", exc)
        raise StoreError("Database error checking category") from exc

    if exists:
        return

    try:
        db.add(Category(id=known.category_id, title=known.title))
        await db.flush()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error creating category: %s", exc)
        raise StoreError("Error creating category") from exc
    logger.info("Created category id=%s (%s)", known.category_id, known.title)


async def read_post(
    db: AsyncSession, post_id: int
) -> tuple[BlogPostView, list[CommentThread]]:
    """
    Return the post and its comment threads.

    Raises NotFoundError when the post does not exist.  A failure while
    loading comments is logged and yields an empty thread list.
    """
    try:
        result = await db.execute(_post_query().where(BlogPost.id == post_id).limit(1))
        row = result.first()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Error fetching blog post %s: %s", post_id, exc)
        raise StoreError("Internal Server Error") from exc

    if row is None:
        raise NotFoundError("Blog not found")
    view = _row_to_view(row)

    try:
        threads = await comment_service.fetch_threads(db, post_id)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning("Error fetching comments for post %s: %s", post_id, exc)
        threads = []

    return view, threads
