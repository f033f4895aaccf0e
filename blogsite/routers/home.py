from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blogsite.database import get_db
from blogsite.errors import StoreError
from blogsite.services import blog_service
from blogsite.templating import render

router = APIRouter(tags=["home"])


@router.get("/")
async def home(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        blogs = await blog_service.list_recent(db)
    except StoreError:
        blogs = []
    return render(request, "index.html", blogs=blogs, featured_blog=None)


@router.get("/health")
async def health():
    return {"status": "healthy"}
