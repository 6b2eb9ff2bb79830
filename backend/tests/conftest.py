"""Root conftest — shared test configuration."""

import os

# Settings are read once at import of library_api.main; keep tests off real databases
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_REQUESTS", "0")
os.environ.setdefault("LOG_FORMAT", "text")
