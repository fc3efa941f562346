"""
Social Posts Backend — Post Service (Business Logic)
=====================================================

What:  Every read and write behind the eight post endpoints.
Why:   Keeps store logic independent of HTTP concerns; routes only validate
       query parameters and format responses.
How:   Each method receives the request's AsyncSession, runs its statements,
       commits mutations itself, and returns PostResponse objects.
Who:   Called by route handlers in routes/posts.py.

Visibility rules:
    - list, get, edit, like, dislike, delete only see rows with removed = FALSE
    - restore only sees rows with removed = TRUE

Snapshots:
    delete, restore, like and dislike return the post as it was read BEFORE
    the mutation. The snapshot is converted to a PostResponse immediately,
    because ORM-enabled UPDATEs synchronize the in-session object.

Counter updates:
    like/dislike issue `UPDATE ... SET likes = likes ± 1` so the arithmetic
    happens in the store; concurrent likes on one post never overwrite each other.

Error Handling Strategy:
    NotFoundError propagates as-is. Any other failure is logged and wrapped in
    DatabaseError (original type kept in context, never shown to the client).
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from social_posts.exceptions import DatabaseError, NotFoundError, PostsServiceError
from social_posts.models.post import Post
from social_posts.schemas.post import PostResponse

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str, post_id: Optional[int] = None) -> Iterator[None]:
    """Wrap unexpected store failures in DatabaseError."""
    try:
        yield
    except PostsServiceError:
        raise  # Already our exception — propagate as-is
    except Exception as e:
        logger.error(
            "Database error during %s (post_id=%s): %s",
            operation,
            post_id,
            str(e),
            exc_info=True,
        )
        raise DatabaseError(
            message=f"Could not {operation}.",
            context={"post_id": post_id, "error_type": type(e).__name__},
        ) from e


class PostService:
    """
    Business logic layer for post operations.

    Responsibilities:
        - list_posts(): visible posts, newest id first
        - get_post(): one visible post
        - create_post(): insert and return the new row
        - edit_post(): change content of a visible post
        - remove_post() / restore_post(): flip the soft-delete flag
        - like_post() / dislike_post(): atomic counter changes
    """

    async def _find(
        self, db: AsyncSession, post_id: int, removed: bool = False
    ) -> Optional[Post]:
        result = await db.execute(
            select(Post).where(Post.removed.is_(removed), Post.id == post_id)
        )
        return result.scalar_one_or_none()

    async def _require(
        self, db: AsyncSession, post_id: int, removed: bool = False
    ) -> Post:
        post = await self._find(db, post_id, removed=removed)
        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return post

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """
        Return all non-removed posts ordered by id descending.

        Query plan:
            SELECT id, content, likes, created, removed FROM social.posts
            WHERE removed = FALSE ORDER BY id DESC
        """
        with _store_errors("list posts"):
            result = await db.execute(
                select(Post).where(Post.removed.is_(False)).order_by(desc(Post.id))
            )
            return [PostResponse.model_validate(post) for post in result.scalars().all()]

    async def get_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """
        Retrieve one non-removed post.

        Raises:
            NotFoundError: No visible post with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        with _store_errors("retrieve the post", post_id):
            post = await self._require(db, post_id)
            return PostResponse.model_validate(post)

    async def create_post(self, db: AsyncSession, content: str) -> PostResponse:
        """
        Insert a post with the given content; every other column takes its default.

        The returned object is the inserted row itself (refreshed after flush),
        so concurrent creates never return each other's posts.
        """
        with _store_errors("create the post"):
            post = Post(content=content)
            db.add(post)
            await db.flush()  # Assigns the id
            await db.refresh(post)  # Loads store-side defaults (created)
            response = PostResponse.model_validate(post)
            await db.commit()
            logger.info("Post %s created", post.id)
            return response

    async def edit_post(self, db: AsyncSession, post_id: int, content: str) -> PostResponse:
        """
        Replace the content of a non-removed post and return the updated post.

        A missing or removed post raises NotFoundError; the UPDATE matches no
        row in that case, so nothing is mutated.
        """
        with _store_errors("edit the post", post_id):
            await db.execute(
                update(Post)
                .where(Post.removed.is_(False), Post.id == post_id)
                .values(content=content)
            )
            post = await self._find(db, post_id)
            if post is None:
                raise NotFoundError(resource="post", resource_id=str(post_id))
            response = PostResponse.model_validate(post)
            await db.commit()
            logger.info("Post %s edited", post_id)
            return response

    async def remove_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """Soft-delete a visible post; returns the post as it was before removal."""
        with _store_errors("remove the post", post_id):
            snapshot = PostResponse.model_validate(await self._require(db, post_id))
            await db.execute(
                update(Post)
                .where(Post.removed.is_(False), Post.id == post_id)
                .values(removed=True)
            )
            await db.commit()
            logger.info("Post %s removed", post_id)
            return snapshot

    async def restore_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """Undo a soft delete; returns the post as it was before restoring."""
        with _store_errors("restore the post", post_id):
            snapshot = PostResponse.model_validate(
                await self._require(db, post_id, removed=True)
            )
            await db.execute(
                update(Post)
                .where(Post.removed.is_(True), Post.id == post_id)
                .values(removed=False)
            )
            await db.commit()
            logger.info("Post %s restored", post_id)
            return snapshot

    async def _change_likes(
        self, db: AsyncSession, post_id: int, delta: int, operation: str
    ) -> PostResponse:
        with _store_errors(operation, post_id):
            snapshot = PostResponse.model_validate(await self._require(db, post_id))
            await db.execute(
                update(Post)
                .where(Post.removed.is_(False), Post.id == post_id)
                .values(likes=Post.likes + delta)
            )
            await db.commit()
            return snapshot

    async def like_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """Increment likes by one; returns the pre-increment snapshot."""
        return await self._change_likes(db, post_id, 1, "like the post")

    async def dislike_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """Decrement likes by one; returns the pre-decrement snapshot."""
        return await self._change_likes(db, post_id, -1, "dislike the post")


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless: sessions are passed in on every call
post_service = PostService()
