"""Root conftest - shared test configuration."""

import os

# Tests never touch the configured PostgreSQL database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
