# Routes package init
"""
Social Posts Backend — API Routes Package
==========================================

Route Inventory:
    - posts.py: the eight /posts.* endpoints and their static route table

Design Principle:
    Routes are THIN: they validate query parameters, call PostService and
    wrap the result with send_json. Store logic lives in services.
"""
