# services/config_service.py
"""Lookup of the form configuration served to the client."""
from pymongo.errors import PyMongoError

from models.configuration import Configuration
from utils.errors import NotFound, StorageError


def get_latest_config():
    """Return the form configuration with the greatest updatedAt."""
    try:
        config = Configuration.latest(Configuration.FORM)
    except PyMongoError as e:
        raise StorageError(str(e)) from e

    if config is None:
        raise NotFound("Configuration not found")
    return config
