"""
config.py
-----------------
Configuration classes for the attendance check-in service.
Loaded with app.config.from_object(get_config(...)).
"""

import os

from dotenv import load_dotenv
from flask import current_app

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"

    # MongoDB
    MONGO_URI = os.environ.get("MONGO_URI") or "mongodb://localhost:27017/AttendanceCheckin"
    MONGO_TIMEOUT_MS = int(os.environ.get("MONGO_TIMEOUT_MS", 5000))

    # Uploads
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB
    ALLOWED_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp", "bmp", "heic"}
    BLOB_BACKEND = os.environ.get("BLOB_BACKEND") or "vercel"  # vercel | local
    BLOB_API_URL = os.environ.get("BLOB_API_URL") or "https://blob.vercel-storage.com"
    BLOB_TIMEOUT = float(os.environ.get("BLOB_TIMEOUT", 30))
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER") or os.path.join(BASE_DIR, "uploads")

    # Outbound attendance sync
    SYNC_TIMEOUT = float(os.environ.get("SYNC_TIMEOUT", 10))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL") or "INFO"
    LOG_FILE = os.path.join("logs", "app.log")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False
    BLOB_BACKEND = os.environ.get("BLOB_BACKEND") or "local"
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False

    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SECRET_KEY = "test-secret-key"
    MONGO_URI = "mongodb://localhost:27017/AttendanceCheckinTest"
    MONGO_TIMEOUT_MS = 1000
    MONGO_CONNECT = False  # tests swap in mongomock
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB for testing
    BLOB_BACKEND = "local"
    BLOB_TIMEOUT = 2
    SYNC_TIMEOUT = 2
    LOG_LEVEL = "WARNING"


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


def get_config(config_name=None):
    """Get configuration class by name, falling back to FLASK_ENV."""
    return config.get(config_name or os.environ.get("FLASK_ENV", "default"), DevelopmentConfig)


def runtime_setting(name, default=None):
    """
    Read a setting from the process environment at call time.
    Falls back to the app config, so tests and CLI runs can set it there.
    """
    value = os.environ.get(name)
    if value:
        return value
    return current_app.config.get(name, default)
