"""
Favlib Application Package

A shared favourite-books list: users sign up, add books with a cover
image and a review, and browse what everyone has added.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection, including session resolution
- exceptions.py: Error taxonomy rendered as {"message": ...}
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic (auth, books, image host, security)
- client.py: Client-side state store talking to the API
"""

__version__ = "0.1.0"
