from pydantic import BaseModel, ConfigDict
from datetime import datetime


# --- Incoming payloads ---
#
# Every field is optional at the schema level: a missing or empty value is
# a client error the services report with their own message (HTTP 400),
# not a schema failure.

class PostCreate(BaseModel):
    title: str | None = None
    content: str | None = None
    category: str | None = None
    blog_tag: str | None = None
    blog_image: str | None = None
    model_config = ConfigDict(extra="ignore")


class CommentCreate(BaseModel):
    idblog: int | None = None
    comment_name: str | None = None
    comment_email: str | None = None
    comment_website: str | None = None
    comment_msg: str | None = None
    model_config = ConfigDict(extra="ignore")


class ReplyCreate(BaseModel):
    idcomment: int | None = None
    reply_name: str | None = None
    reply_email: str | None = None
    reply_msg: str | None = None
    model_config = ConfigDict(extra="ignore")


# --- Category ---

class CategoryView(BaseModel):
    id: int
    title: str
    model_config = ConfigDict(from_attributes=True)


# --- Blog post ---

class BlogPostView(BaseModel):
    """A post joined with its category title and author name."""

    id: int
    title: str
    body: str
    image: str | None = None
    author_display: str
    created_at: datetime | None = None
    category_id: int | None = None
    tag: str | None = None
    user_id: int | None = None
    category_title: str | None = None
    author_first_name: str | None = None
    author_last_name: str | None = None


# --- Comment thread ---

class ReplyView(BaseModel):
    id: int
    name: str
    email: str
    message: str


class CommentThread(BaseModel):
    id: int
    name: str
    email: str
    website: str | None = None
    message: str
    replies: list[ReplyView] = []
