# app/api/__init__.py
"""
HTTP layer. Router aggregation lives in `app/api/router.py`.
"""

__all__ = []
