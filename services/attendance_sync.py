# services/attendance_sync.py
"""
Outbound forwarding of attendance records to an external sync endpoint.

The primary submission never waits on or fails because of this step:
the dispatcher runs the adapter on a daemon thread and only logs the
outcome. With no ATTENDANCE_SYNC_URL in the environment nothing is sent.
"""
import logging
import threading

import requests
from flask import current_app

from config import runtime_setting

logger = logging.getLogger(__name__)


class SyncResult:
    def __init__(self, ok, status_code=None, error=None):
        self.ok = ok
        self.status_code = status_code
        self.error = error

    def __repr__(self):
        return f"SyncResult(ok={self.ok}, status_code={self.status_code}, error={self.error!r})"


class SyncAdapter:
    """Interface for outbound sync transports."""

    def send(self, payload):
        raise NotImplementedError


class HttpSyncAdapter(SyncAdapter):
    """POSTs the payload as JSON to the sync endpoint."""

    def __init__(self, url, timeout):
        self.url = url
        self.timeout = timeout

    def send(self, payload):
        response = requests.post(self.url, json=payload, timeout=self.timeout)
        if response.ok:
            return SyncResult(True, response.status_code)
        return SyncResult(False, response.status_code, response.text[:500])


def build_sync_payload(record, photo_base64=None):
    """
    Normalize a stored record for the external system: numeric coordinates,
    uppercased work type, and the photo as base64 data when the client sent
    it, otherwise the stored photo URL.
    """
    work_type = record.work_type or ""
    return {
        "attendance_id": str(record.id) if record.id is not None else None,
        "apk_version": record.apk_version,
        "employee_id": record.employee_id,
        "presence_type": record.presence_type,
        "work_type": work_type.upper(),
        "latitude": float(record.latitude),
        "longitude": float(record.longitude),
        "information": record.information or "",
        "photo": photo_base64 or record.photo_evidence or "",
        "created_at": record.created_at.isoformat(),
    }


class SyncDispatcher:
    """Runs an adapter off the request path and reports the outcome to the log."""

    def __init__(self, adapter, run_in_background=True, on_result=None):
        self.adapter = adapter
        self.run_in_background = run_in_background
        self.on_result = on_result

    def _run(self, payload):
        try:
            result = self.adapter.send(payload)
        except Exception as e:
            logger.exception("Attendance sync failed for employee %s", payload.get("employee_id"))
            result = SyncResult(False, error=str(e))
        else:
            if result.ok:
                logger.info("Attendance sync delivered (status %s)", result.status_code)
            else:
                logger.warning("Attendance sync rejected (status %s): %s", result.status_code, result.error)

        if self.on_result is not None:
            self.on_result(result)
        return result

    def dispatch(self, payload):
        """Send the payload; returns the worker thread, or the result when inline."""
        if not self.run_in_background:
            return self._run(payload)
        worker = threading.Thread(target=self._run, args=(payload,), name="attendance-sync", daemon=True)
        worker.start()
        return worker


def get_sync_dispatcher():
    """Dispatcher for the current environment, or None when forwarding is off."""
    url = runtime_setting("ATTENDANCE_SYNC_URL")
    if not url:
        return None
    adapter = HttpSyncAdapter(url, timeout=current_app.config.get("SYNC_TIMEOUT", 10))
    return SyncDispatcher(adapter)


def forward_attendance(record, photo_base64=None, dispatcher=None):
    """
    Hand a committed record to the sync dispatcher.
    Never raises: a payload or dispatch failure is logged and swallowed.
    """
    dispatcher = dispatcher or get_sync_dispatcher()
    if dispatcher is None:
        return None
    try:
        payload = build_sync_payload(record, photo_base64)
        return dispatcher.dispatch(payload)
    except Exception:
        logger.exception("Could not forward attendance %s", record.id)
        return None
