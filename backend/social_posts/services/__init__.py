# Services package init
"""
Social Posts Backend — Services Layer
======================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - PostService: list, get, create, edit, soft delete, restore, like, dislike
"""
