# models/__init__.py

from .attendance import AttendanceRecord
from .configuration import Configuration, ConfigOption

__all__ = [
    "AttendanceRecord",
    "Configuration",
    "ConfigOption",
]
