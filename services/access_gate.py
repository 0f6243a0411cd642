# services/access_gate.py
"""Passkey check gating access to the attendance form."""
import hmac
import logging

from pymongo.errors import PyMongoError

from models.configuration import Configuration
from utils.errors import ConfigurationMissing, StorageError, Unauthorized, ValidationError

logger = logging.getLogger(__name__)


def load_pass_key():
    """
    Return the authoritative passkey, or None if nothing is configured.
    A dedicated passKey document wins; a form document carrying a passKey
    field is accepted as well.
    """
    try:
        for kind in (Configuration.PASSKEY, Configuration.FORM):
            config = Configuration.latest(kind)
            if config and config.pass_key not in (None, ""):
                return str(config.pass_key)
    except PyMongoError as e:
        raise StorageError(str(e)) from e
    return None


def validate_pass_key(candidate):
    """
    Single-shot check of a candidate passkey. No credential is issued and
    nothing is recorded; every call stands alone.
    """
    if candidate is None or candidate == "":
        raise ValidationError("PassKey is required")

    stored = load_pass_key()
    if not stored:
        logger.warning("PassKey validation attempted but no passkey is configured")
        raise ConfigurationMissing()

    if not isinstance(candidate, str) or not hmac.compare_digest(candidate.encode("utf-8"), stored.encode("utf-8")):
        logger.info("PassKey validation denied")
        raise Unauthorized()

    return {"granted": True}
