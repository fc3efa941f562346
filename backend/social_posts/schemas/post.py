"""
Social Posts Backend — Pydantic Response Schema
================================================

What:  The JSON shape of a post as returned by every endpoint.
Why:   Controls exactly what is exposed: the `removed` flag is internal and
       never serialized.
How:   Built from ORM rows with `model_validate(post)` (from_attributes).
       `created` is serialized as an ISO 8601 string.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class PostResponse(BaseModel):
    """
    What:  Public representation of a post.
    Who:   Returned (alone or in a list) by all eight post endpoints.

    Example:
        {"id": 1, "content": "hello", "likes": 0, "created": "2024-01-15T12:00:00+00:00"}
    """
    id: int = Field(description="Store-assigned post identifier")
    content: str = Field(description="Post text")
    likes: int = Field(description="Like counter")
    created: datetime = Field(description="Creation timestamp (ISO 8601)")

    model_config = {"from_attributes": True}
