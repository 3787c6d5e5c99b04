"""
Posts API: Post Service
=========================

What:  The five post operations plus the identifier check they share.
How:   Each method runs one or two TableQuery statements on the session it is
       given and returns a response model, or raises NotFoundError/DatabaseError.
Who:   Called by the /posts route handlers and the validate_post_id dependency.

Statement map:
    list_posts      SELECT * FROM posts
    ensure_exists   SELECT * FROM posts WHERE id = ? LIMIT 1
    get_post        SELECT * FROM posts WHERE id = ? LIMIT 1
    create_post     INSERT INTO posts (...) VALUES (...) RETURNING id, then re-read
    update_post     UPDATE posts SET ... WHERE id = ?, then re-read
    delete_post     DELETE FROM posts WHERE id = ?

The service is stateless: nothing about a post survives the request that
read or wrote it.
"""

import logging
from typing import Any, List

from sqlalchemy import Table
from sqlalchemy.ext.asyncio import AsyncSession

from posts_api.exceptions import DatabaseError, NotFoundError
from posts_api.models.post import Post
from posts_api.query import TableQuery
from posts_api.schemas.post import PostPayload, PostResponse

logger = logging.getLogger(__name__)

# Range of the INTEGER primary key; ids outside it can never be stored
POST_ID_MIN = -(2**31)
POST_ID_MAX = 2**31 - 1


class PostService:
    """
    Operations on the posts table.

    Error Handling Strategy:
        Store failures arrive from TableQuery already wrapped in DatabaseError
        and are left to propagate. A missing row is turned into NotFoundError
        here. Nothing is retried.
    """

    def __init__(self, table: Table = Post.__table__):
        self.posts = TableQuery(table)

    def _by_id(self, post_id: Any) -> TableQuery:
        if not POST_ID_MIN <= post_id <= POST_ID_MAX:
            logger.info("Post %s not found: id outside the key range", post_id)
            raise NotFoundError(resource="post", resource_id=post_id)
        return self.posts.where("id", post_id)

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """Every stored post, in the order the store returns them."""
        rows = await self.posts.select(db)
        logger.debug("Listed %d posts", len(rows))
        return [PostResponse.model_validate(row) for row in rows]

    async def ensure_exists(self, db: AsyncSession, post_id: int) -> None:
        """
        Identifier check run before get/update/delete.

        Raises:
            NotFoundError: no post has this id, or the id cannot be a key (→ 404)
            DatabaseError: the lookup itself failed (→ 500)
        """
        row = await self._by_id(post_id).first(db)
        if row is None:
            logger.info("Post %s not found", post_id)
            raise NotFoundError(resource="post", resource_id=post_id)

    async def get_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        row = await self._by_id(post_id).first(db)
        if row is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return PostResponse.model_validate(row)

    async def create_post(self, db: AsyncSession, payload: PostPayload) -> PostResponse:
        """
        Insert a post and return it as stored.

        The response comes from re-reading the new row, not from echoing the
        payload. A failed re-read is reported like a failed insert.
        """
        new_id = await self.posts.insert(db, payload.to_values())
        logger.info("Post %s created", new_id)

        row = await self._by_id(new_id).first(db)
        if row is None:
            raise DatabaseError(
                message="The post was created but could not be read back.",
                context={"post_id": new_id},
            )
        return PostResponse.model_validate(row)

    async def update_post(
        self, db: AsyncSession, post_id: int, payload: PostPayload
    ) -> PostResponse:
        """
        Overwrite title/contents with the fields present in the payload.

        An empty payload writes nothing and returns the post as it is. If the
        row disappears between the write and the re-read, NotFoundError.
        """
        values = payload.to_values()
        if values:
            updated = await self._by_id(post_id).update(db, values)
            logger.info("Post %s updated (%d row(s), fields=%s)", post_id, updated, sorted(values))
        else:
            logger.debug("Post %s update skipped: no fields in payload", post_id)
        return await self.get_post(db, post_id)

    async def delete_post(self, db: AsyncSession, post_id: int) -> None:
        deleted = await self._by_id(post_id).delete(db)
        logger.info("Post %s deleted (%d row(s))", post_id, deleted)


post_service = PostService()
