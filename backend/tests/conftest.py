"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or a real signing secret
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("JWT_SECRET", "test-secret-for-reactivities-pipeline-tests")
os.environ.setdefault("LOG_FORMAT", "text")
