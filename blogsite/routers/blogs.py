from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError as PayloadError
from sqlalchemy.ext.asyncio import AsyncSession

from blogsite.categories import Category
from blogsite.database import get_db
from blogsite.dependencies import request_payload, require_session
from blogsite.errors import BlogError, NotFoundError, StoreError, ValidationError
from blogsite.schemas import CommentCreate, PostCreate, ReplyCreate
from blogsite.services import blog_service, comment_service, upload_service
from blogsite.session import SessionContext
from blogsite.templating import render

router = APIRouter(prefix="/blogs", tags=["blogs"])


def _failure(exc: BlogError) -> JSONResponse:
    return JSONResponse(
        {"success": False, "message": exc.message}, status_code=exc.status_code
    )


def _parse(schema, payload: dict):
    try:
        return schema.model_validate(payload)
    except PayloadError:
        raise ValidationError(
            "All required fields must be filled", code=ValidationError.MISSING_FIELDS
        )


@router.get("/blogs")
async def member_feed(
    request: Request,
    ctx: SessionContext = Depends(require_session),
    db: AsyncSession = Depends(get_db),
):
    try:
        posts = await blog_service.list_recent(db)
    except StoreError:
        posts = []
    featured, rest = blog_service.split_featured(posts)
    return render(request, "index.html", blogs=rest, featured_blog=featured)


@router.get("/post")
async def post_form(
    request: Request,
    ctx: SessionContext = Depends(require_session),
    db: AsyncSession = Depends(get_db),
):
    categories = await blog_service.list_categories(db)
    return render(
        request, "post_blog.html", categories=categories, known_categories=list(Category)
    )


@router.post("/post")
async def create_post(
    ctx: SessionContext = Depends(require_session),
    payload: dict = Depends(request_payload),
    db: AsyncSession = Depends(get_db),
):
    try:
        blog_id = await blog_service.create_post(db, ctx, _parse(PostCreate, payload))
    except BlogError as exc:
        return _failure(exc)
    return {"success": True, "message": "Blog post created successfully", "blogId": blog_id}


@router.post("/upload-image")
async def upload_image(
    ctx: SessionContext = Depends(require_session),
    image: UploadFile | None = File(None),
):
    try:
        url = await upload_service.store_image(image)
    except BlogError as exc:
        return _failure(exc)
    return {"success": True, "url": url}


@router.get("/read/{blog_id}")
async def read_post(request: Request, blog_id: str, db: AsyncSession = Depends(get_db)):
    # A non-numeric id can never match a row.
    if not (blog_id.isascii() and blog_id.isdigit()):
        return PlainTextResponse("Blog not found", status_code=404)
    try:
        blog, comments = await blog_service.read_post(db, int(blog_id))
    except NotFoundError as exc:
        return PlainTextResponse(exc.message, status_code=404)
    except StoreError:
        return PlainTextResponse("Internal Server Error", status_code=500)
    return render(request, "read_blog.html", blog=blog, comments=comments)


@router.post("/comment")
async def add_comment(
    payload: dict = Depends(request_payload),
    db: AsyncSession = Depends(get_db),
):
    try:
        comment_id = await comment_service.add_comment(db, _parse(CommentCreate, payload))
    except BlogError as exc:
        return _failure(exc)
    return {"success": True, "message": "Comment added successfully", "commentId": comment_id}


@router.post("/reply")
async def add_reply(
    payload: dict = Depends(request_payload),
    db: AsyncSession = Depends(get_db),
):
    try:
        reply_id = await comment_service.add_reply(db, _parse(ReplyCreate, payload))
    except BlogError as exc:
        return _failure(exc)
    return {"success": True, "message": "Reply added successfully", "replyId": reply_id}
