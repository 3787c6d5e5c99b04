"""
Posts API: Post Route Handlers
================================

What:  The /posts resource: list, get, create, update, delete.
How:   Each handler calls exactly one PostService operation and returns its
       result; FastAPI serializes it as JSON.

Identifier check:
    get/update/delete depend on `validate_post_id`, which looks the post up
    first. A missing post ends the request with 404 before the handler body
    runs. The check and the handler share the request's session.

Errors are not handled here. NotFoundError and DatabaseError propagate to the
exception handlers registered in main.py.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from posts_api.database import get_db_session
from posts_api.schemas.common import ErrorResponse
from posts_api.schemas.post import PostPayload, PostResponse
from posts_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])

_NOT_FOUND = {404: {"description": "Post not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


async def validate_post_id(
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> int:
    """
    Dependency: confirm the post in the path exists before the handler runs.

    Returns the id unchanged so handlers can depend on it directly.
    Raises NotFoundError (404) or DatabaseError (500).
    """
    await post_service.ensure_exists(db, post_id)
    return post_id


@router.get(
    "",
    response_model=list[PostResponse],
    responses=_SERVER_ERROR,
    summary="List all posts",
)
async def list_posts(db: AsyncSession = Depends(get_db_session)) -> list[PostResponse]:
    return await post_service.list_posts(db)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a single post by ID",
)
async def get_post(
    post_id: int = Depends(validate_post_id),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get_post(db, post_id)


@router.post(
    "",
    response_model=PostResponse,
    responses=_SERVER_ERROR,
    summary="Create a post",
    description=(
        "Inserts a post from `title` and `contents` and returns the stored row, "
        "including the id the database assigned."
    ),
)
async def create_post(
    payload: PostPayload,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create_post(db, payload)


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Update a post",
    description="Overwrites the supplied fields and returns the post as stored afterwards.",
)
async def update_post(
    payload: PostPayload,
    post_id: int = Depends(validate_post_id),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.update_post(db, post_id, payload)


@router.delete(
    "/{post_id}",
    status_code=204,
    response_class=Response,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a post",
)
async def delete_post(
    post_id: int = Depends(validate_post_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await post_service.delete_post(db, post_id)
    return Response(status_code=204)
