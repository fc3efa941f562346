"""
Social Posts Backend — Post SQLAlchemy Model
=============================================

What:  ORM model representing the `social.posts` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by PostService for every read and write.

Table Design:
    - id: store-assigned integer key, never reused (soft delete keeps the row)
    - content: free text, the only user-editable column
    - likes: counter changed only by store-side arithmetic (likes ± 1)
    - created: UTC timestamp assigned on insert
    - removed: soft-delete flag; list/get/edit/like/dislike only see FALSE rows

    Index on (removed, id):
        Every query filters on `removed` and either orders or filters by `id`.
"""

from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, BigInteger, Boolean, Index, Integer, Text, false, text
from sqlalchemy.orm import Mapped, mapped_column

from social_posts.database import Base, POSTS_SCHEMA

# SQLite only auto-assigns INTEGER PRIMARY KEY columns
PostIdType = BigInteger().with_variant(Integer, "sqlite")


class Post(Base):
    """
    A single post.

    Lifecycle:
        1. Created by /posts.post (likes = 0, removed = false)
        2. Mutated by edit, like, dislike
        3. Soft-deleted by /posts.delete (removed = true), never physically deleted
        4. Made visible again by /posts.restore (removed = false)
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        PostIdType,
        primary_key=True,
        autoincrement=True,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    # Why TIMESTAMP WITH TIME ZONE: Unambiguous time representation globally
    created: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    removed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    __table_args__ = (
        Index("idx_posts_removed_id", "removed", "id"),
        {"schema": POSTS_SCHEMA},
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Post(id={self.id}, likes={self.likes}, removed={self.removed})>"
