"""
utils/db.py
-----------------
This module initializes and manages the MongoDB connection
for the entire Flask application.
"""

import logging

from flask_pymongo import PyMongo

logger = logging.getLogger(__name__)

# Create a global MongoDB instance
mongo = PyMongo()


def init_db_connection(app):
    """
    Initialize MongoDB connection with Flask app.
    Uses MONGO_URI from the loaded config; every network wait is bounded
    by MONGO_TIMEOUT_MS.
    """
    timeout_ms = app.config.get("MONGO_TIMEOUT_MS", 5000)
    mongo.init_app(
        app,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
        socketTimeoutMS=timeout_ms,
        tz_aware=True,
        connect=app.config.get("MONGO_CONNECT", True),
    )

    logger.info("MongoDB connection initialized")
    return mongo

