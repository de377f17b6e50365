"""Root conftest — shared test configuration."""

import os

# Ensure tests never pick up a developer's .env pointing at a real server
os.environ.setdefault("MONGO_DEFAULT_HOST", "mongo.test.invalid")
os.environ.setdefault("MONGO_DEFAULT_PORT", "27017")
os.environ.setdefault("LOG_FORMAT", "text")
