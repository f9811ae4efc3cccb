"""HTTP routes."""

from simple_blog.api.router import site_router

__all__ = ["site_router"]
