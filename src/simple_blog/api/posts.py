"""Home page and post routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from starlette.responses import Response

from simple_blog.api.views import redirect, render
from simple_blog.models.post import Post
from simple_blog.services.posts import PostStore, get_post_store
from simple_blog.services.validation import validate_post
from simple_blog.utils.permissions import (
    CurrentIdentity,
    OptionalIdentity,
    ensure_owner,
    is_author,
)

router = APIRouter(tags=["posts"])

# Largest value SQLite stores in an INTEGER column
MAX_POST_ID = 2**63 - 1


def parse_post_id(raw_id: str) -> int | None:
    """Parse a post id from the URL. Anything that cannot name a row is None."""
    if not (raw_id.isascii() and raw_id.isdigit()):
        return None
    post_id = int(raw_id)
    return post_id if 0 < post_id <= MAX_POST_ID else None


async def find_post(posts: PostStore, raw_id: str) -> Post | None:
    """Look a post up by its URL id; unparsable ids are treated as missing."""
    post_id = parse_post_id(raw_id)
    if post_id is None:
        return None
    return await posts.get_by_id(post_id)


@router.get("/")
async def home(
    request: Request,
    identity: OptionalIdentity,
    posts: PostStore = Depends(get_post_store),
) -> Response:
    """Show the viewer's own posts, or the landing page when anonymous."""
    if identity is None:
        return render(request, "homepage.html")

    user_posts = await posts.list_by_author(identity.user_id)
    return render(request, "dashboard.html", {"posts": user_posts})


@router.get("/create-post")
async def create_post_form(request: Request, identity: CurrentIdentity) -> Response:  # noqa: ARG001
    """Render an empty post form."""
    return render(request, "create-post.html", {"title": "", "body": ""})


@router.post("/create-post")
async def create_post(
    request: Request,
    identity: CurrentIdentity,
    title: Annotated[str, Form()] = "",
    body: Annotated[str, Form()] = "",
    posts: PostStore = Depends(get_post_store),
) -> Response:
    """Create a post owned by the viewer and show it."""
    errors = validate_post(title, body)
    if errors:
        return render(request, "create-post.html", {"title": title, "body": body}, errors=errors)

    post = await posts.create(title.strip(), body.strip(), identity.user_id)
    return redirect(f"/post/{post.id}")


@router.get("/post/{post_id}")
async def view_post(
    request: Request,
    post_id: str,
    identity: OptionalIdentity,
    posts: PostStore = Depends(get_post_store),
) -> Response:
    """Show a single post; anyone may view it."""
    post = await find_post(posts, post_id)
    if post is None:
        return redirect("/")

    return render(
        request,
        "single-post.html",
        {"post": post, "is_author": is_author(post, identity)},
    )


@router.get("/edit-post/{post_id}")
async def edit_post_form(
    request: Request,
    post_id: str,
    identity: CurrentIdentity,
    posts: PostStore = Depends(get_post_store),
) -> Response:
    """Render the edit form pre-filled, for the author only."""
    post = ensure_owner(await find_post(posts, post_id), identity)
    return render(request, "edit-post.html", {"post": post, "title": post.title, "body": post.body})


@router.post("/edit-post/{post_id}")
async def edit_post(
    request: Request,
    post_id: str,
    identity: CurrentIdentity,
    title: Annotated[str, Form()] = "",
    body: Annotated[str, Form()] = "",
    posts: PostStore = Depends(get_post_store),
) -> Response:
    """Update a post's title and body.

    Ownership is checked again here; the post may have changed hands or
    vanished since the form was rendered.
    """
    post = ensure_owner(await find_post(posts, post_id), identity)

    errors = validate_post(title, body)
    if errors:
        return render(
            request,
            "edit-post.html",
            {"post": post, "title": title, "body": body},
            errors=errors,
        )

    await posts.update(post.id, title.strip(), body.strip())
    return redirect(f"/post/{post.id}")


@router.post("/delete-post/{post_id}")
async def delete_post(
    post_id: str,
    identity: CurrentIdentity,
    posts: PostStore = Depends(get_post_store),
) -> Response:
    """Delete a post owned by the viewer."""
    post = ensure_owner(await find_post(posts, post_id), identity)
    await posts.delete(post.id)
    return redirect("/")
