"""Root conftest: shared test configuration.

Settings are read once when community_api.main is imported, so the
environment must be complete before any test module imports the app.
"""

import os

os.environ.setdefault("COOKIE_SECRET", "test-cookie-secret-not-for-production")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-with-at-least-32-bytes")
os.environ.setdefault("COOKIE_SECURE", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
