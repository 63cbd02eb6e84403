"""
Services Package

Business logic kept apart from HTTP handling:
- auth.py: Signup, login and user resolution
- books.py: Add-book pipeline and the newest-first listing
- image_host.py: Cloudinary upload client
- rate_limiter.py: slowapi limiter for the auth endpoints
- security.py: Password hashing and session tokens
"""
