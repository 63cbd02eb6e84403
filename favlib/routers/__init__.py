"""
API Routers Package

Router Structure:
- auth.py: signup, login, fetch-user, logout
- books.py: add-book, fetch-books

Both are mounted under /api in main.py.
"""

from favlib.routers.auth import router as auth_router
from favlib.routers.books import router as books_router

__all__ = [
    "auth_router",
    "books_router",
]
