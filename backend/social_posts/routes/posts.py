"""
Social Posts Backend — Post Route Handlers
===========================================

What:  The eight post endpoints and the static table that routes paths to them.
How:   Each handler reads raw query strings, validates them (400 before any
       store access), calls PostService, and answers with send_json.
       Not-found and store errors are raised and answered by the global
       exception handlers in main.py.

Route table:
    /posts.get       list        (no params)
    /posts.getById   get         id
    /posts.post      create      content
    /posts.edit      edit        id, content
    /posts.delete    soft delete id
    /posts.restore   restore     id
    /posts.like      like        id
    /posts.dislike   dislike     id

Handlers do not check the HTTP verb: every path is registered for all of
ROUTE_METHODS.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from social_posts.database import get_db_session
from social_posts.responses import send_json
from social_posts.services.post_service import post_service
from social_posts.validation import parse_post_id, require_param

logger = logging.getLogger(__name__)

ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

PostHandler = Callable[..., Awaitable[Response]]


async def get_posts(db: AsyncSession = Depends(get_db_session)) -> Response:
    """List all visible posts, newest id first."""
    return send_json(await post_service.list_posts(db))


async def get_post_by_id(
    raw_id: Optional[str] = Query(default=None, alias="id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    post_id = parse_post_id(raw_id)
    return send_json(await post_service.get_post(db, post_id))


async def create_post(
    content: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Create a post from the `content` query parameter.

    Presence is all that is checked: an empty string is a valid post body.
    """
    text = require_param(content, "content")
    return send_json(await post_service.create_post(db, text))


async def edit_post(
    raw_id: Optional[str] = Query(default=None, alias="id"),
    content: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    post_id = parse_post_id(raw_id)
    text = require_param(content, "content")
    return send_json(await post_service.edit_post(db, post_id, text))


async def delete_post(
    raw_id: Optional[str] = Query(default=None, alias="id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """Soft-delete; the body is the post as it was before removal."""
    post_id = parse_post_id(raw_id)
    return send_json(await post_service.remove_post(db, post_id))


async def restore_post(
    raw_id: Optional[str] = Query(default=None, alias="id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """Restore a removed post; the body is the post as it was before restoring."""
    post_id = parse_post_id(raw_id)
    return send_json(await post_service.restore_post(db, post_id))


async def like_post(
    raw_id: Optional[str] = Query(default=None, alias="id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    post_id = parse_post_id(raw_id)
    return send_json(await post_service.like_post(db, post_id))


async def dislike_post(
    raw_id: Optional[str] = Query(default=None, alias="id"),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    post_id = parse_post_id(raw_id)
    return send_json(await post_service.dislike_post(db, post_id))


# ── Static Route Table ────────────────────────────────────────────────────
POST_ROUTES: Dict[str, PostHandler] = {
    "/posts.get": get_posts,
    "/posts.getById": get_post_by_id,
    "/posts.post": create_post,
    "/posts.edit": edit_post,
    "/posts.delete": delete_post,
    "/posts.restore": restore_post,
    "/posts.like": like_post,
    "/posts.dislike": dislike_post,
}


def build_router(routes: Dict[str, PostHandler] = POST_ROUTES) -> APIRouter:
    """Register every entry of the route table for all methods."""
    router = APIRouter(tags=["Posts"])
    for path, handler in routes.items():
        router.add_api_route(
            path,
            handler,
            methods=ROUTE_METHODS,
            response_class=Response,
            include_in_schema=False,
        )
    return router


router = build_router()
