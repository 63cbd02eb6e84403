"""
Test Suite for Favlib

Test Organization:
- conftest.py: Shared fixtures (test database, client, fake image host)
- test_security.py: Password hashing and session token lifetime
- test_auth.py: /api/signup, /api/login, /api/fetch-user, /api/logout
- test_books.py: /api/add-book, /api/fetch-books and the add-book pipeline
- test_image_host.py: Cloudinary upload client
- test_client_store.py: Client state store against the live app
- test_app.py: Root, health, CORS and settings

Running Tests:
    pytest
    pytest tests/test_books.py -v
"""
