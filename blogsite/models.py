from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from blogsite.database import Base

# Column names follow the existing ``users`` / ``blog`` / ``category`` /
# ``comment`` / ``reply`` schema; attribute names are the Python-side view.
# There are no ORM relationships: services read through explicit joins.


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------
class Category(Base):
    __tablename__ = "category"

    # Ids come from blogsite.categories, never from the database.
    id: Mapped[int] = mapped_column("idcategory", Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column("category_title", String(100), nullable=False)


# ---------------------------------------------------------------------------
# BlogPost
# ---------------------------------------------------------------------------
class BlogPost(Base):
    __tablename__ = "blog"

    id: Mapped[int] = mapped_column("idblog", Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column("blog_title", String(300), nullable=False)
    body: Mapped[str] = mapped_column("blog_detail", Text, nullable=False)
    image: Mapped[Optional[str]] = mapped_column("blog_image", String(500), nullable=True)
    author_display: Mapped[str] = mapped_column("blog_author", String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "blog_datetime", DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    tag: Mapped[Optional[str]] = mapped_column("blog_tag", String(100), nullable=True)

    # Foreign keys
    category_id: Mapped[Optional[int]] = mapped_column(
        "idcategory", Integer, ForeignKey("category.idcategory"), nullable=True, index=True
    )
    user_id: Mapped[int] = mapped_column(
        "iduser", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------
class Comment(Base):
    __tablename__ = "comment"

    id: Mapped[int] = mapped_column("idcomment", Integer, primary_key=True, autoincrement=True)
    blog_id: Mapped[int] = mapped_column(
        "idblog", Integer, ForeignKey("blog.idblog", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column("comment_name", String(150), nullable=False)
    email: Mapped[str] = mapped_column("comment_email", String(255), nullable=False)
    website: Mapped[Optional[str]] = mapped_column("comment_website", String(255), nullable=True)
    message: Mapped[str] = mapped_column("comment_msg", Text, nullable=False)


# ---------------------------------------------------------------------------
# Reply
# ---------------------------------------------------------------------------
class Reply(Base):
    __tablename__ = "reply"

    id: Mapped[int] = mapped_column("idreply", Integer, primary_key=True, autoincrement=True)
    comment_id: Mapped[int] = mapped_column(
        "idcomment",
        Integer,
        ForeignKey("comment.idcomment", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column("reply_name", String(150), nullable=False)
    email: Mapped[str] = mapped_column("reply_email", String(255), nullable=False)
    message: Mapped[str] = mapped_column("reply_msg", Text, nullable=False)
