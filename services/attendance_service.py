# services/attendance_service.py
"""Attendance submission: validate, persist, then forward."""
import logging

from pymongo.errors import PyMongoError

from models.attendance import AttendanceRecord
from services.attendance_sync import forward_attendance
from utils.errors import StorageError, ValidationError
from utils.validators import missing_fields

logger = logging.getLogger(__name__)


def submit(data, dispatcher=None):
    """
    Persist a new attendance record and return it with its id.
    Forwarding happens only after the insert has committed.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    missing = missing_fields(data, AttendanceRecord.REQUIRED_FIELDS)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    record = AttendanceRecord.from_request(data)
    try:
        record.save()
    except PyMongoError as e:
        logger.error("Attendance insert failed: %s", e)
        raise StorageError(str(e)) from e

    logger.info("Attendance %s recorded for employee %s (%s)",
                record.id, record.employee_id, record.presence_type)

    forward_attendance(record, data.get("photoBase64"), dispatcher=dispatcher)
    return record
