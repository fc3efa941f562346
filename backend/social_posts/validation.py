"""
Social Posts Backend — Query Parameter Validation
==================================================

What:  Presence and numeric checks for query parameters.
When:  Called by route handlers before any store access.

Rules:
    - A missing required parameter → ValidationError (400)
    - `id` must parse to a finite number; whitespace is ignored and the
      empty string is malformed → ValidationError (400)
    - "0" is a valid id; parsing to zero is never treated as "missing"
    - A finite value that cannot be a row id (non-integral, or outside the
      signed 64-bit range) → NotFoundError (404) without a query
"""

import math
from typing import Optional

from social_posts.exceptions import NotFoundError, ValidationError

MAX_POST_ID = 2**63 - 1


def require_param(value: Optional[str], name: str) -> str:
    """Return the parameter value, or raise ValidationError when it is absent."""
    if value is None:
        raise ValidationError(message=f"Query parameter '{name}' is required", field=name)
    return value


def parse_post_id(value: Optional[str], name: str = "id") -> int:
    """
    Parse a post id query parameter.

    Examples:
        "7" → 7, " 7 " → 7, "7.0" → 7, "1e2" → 100, "0" → 0
        None, "", "abc", "nan", "inf", "1_0" → ValidationError
        "1.5", "1e30" → NotFoundError
    """
    raw = require_param(value, name).strip()
    # float() and int() both accept digit separators ("1_0"); ids never carry them
    if "_" in raw:
        raise ValidationError(message=f"Query parameter '{name}' must be a number", field=name)
    try:
        number = float(raw)
    except ValueError:
        raise ValidationError(message=f"Query parameter '{name}' must be a number", field=name)
    if not math.isfinite(number):
        raise ValidationError(message=f"Query parameter '{name}' must be a number", field=name)

    # Integer strings are parsed exactly; float() loses precision past 2**53
    try:
        post_id = int(raw)
    except ValueError:
        if not number.is_integer():
            raise NotFoundError(resource="post", resource_id=raw)
        post_id = int(number)

    if abs(post_id) > MAX_POST_ID:
        raise NotFoundError(resource="post", resource_id=raw)
    return post_id
