"""Error taxonomy shared by the services and the JSON error handlers."""


class AppError(Exception):
    """Base application error, carries the HTTP status it maps to."""
    status_code = 500
    default_message = "Server Error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Request is malformed or incomplete."""
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(AppError):
    """Submitted passkey does not match."""
    status_code = 401
    default_message = "Invalid PassKey"


class NotFound(AppError):
    """No configuration document exists."""
    status_code = 404
    default_message = "Configuration not found"


class ConfigurationMissing(AppError):
    """Passkey check is unusable because nothing is configured."""
    status_code = 404
    default_message = "PassKey Configuration not found"


class StorageError(AppError):
    """Database or blob storage failure."""
    status_code = 500
    default_message = "Storage error"
