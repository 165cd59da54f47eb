"""Test environment: must run before any `app` module reads settings."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["JWT_SECRET"] = "test-secret-key-with-at-least-32-bytes!!"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
