"""Main router aggregation."""

from fastapi import APIRouter

from simple_blog.api.auth import router as auth_router
from simple_blog.api.posts import router as posts_router

# Pages are served from the site root
site_router = APIRouter()

# Include all sub-routers
site_router.include_router(auth_router)
site_router.include_router(posts_router)
