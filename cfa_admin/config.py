"""
Application configuration, read from the environment.
run.py loads a local .env first (python-dotenv).
"""
import os


class Config:
    # Core Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key-change-in-production")

    # Session security
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    # Backend REST API
    BACKEND_BASE_URL = os.environ.get("BACKEND_BASE_URL", "https://prepnovate-backend.onrender.com")
    BACKEND_TIMEOUT = int(os.environ.get("BACKEND_TIMEOUT", "15"))

    # Timestamps on created mock tests
    TIMEZONE = os.environ.get("TIMEZONE", "Asia/Kolkata")

    # Mock test form defaults
    DEFAULT_TOTAL_QUESTIONS = int(os.environ.get("DEFAULT_TOTAL_QUESTIONS", "50"))
    DEFAULT_TIME_LIMIT = int(os.environ.get("DEFAULT_TIME_LIMIT", "90"))
    DEFAULT_PASSING_SCORE = int(os.environ.get("DEFAULT_PASSING_SCORE", "70"))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
