"""
client/form_client.py
---------------------------------
Python counterpart of the browser attendance form.

Drives the same flow against the HTTP API:
passkey gate -> config lookup -> [photo upload] -> attendance submission.
"""

import base64
import logging

import requests

from client.image_compression import ImageCompressionError, compress_image

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = {
    "apkVersion": [{"value": "2.0.0", "name": "2.0.0"}],
    "presenceType": [
        {"value": "CI", "name": "Check In"},
        {"value": "CO", "name": "Check Out"},
    ],
    "workType": [
        {"value": "wfo", "name": "WFO"},
        {"value": "wfh", "name": "WFH"},
    ],
}

DEFAULT_FORM = {
    "apkVersion": "2.0.0",
    "employeeId": "",
    "presenceType": "CI",
    "latitude": "-6.1694068438218785",
    "longitude": "106.83763796699102",
    "workType": "wfc",
    "information": "",
}


class FormError(Exception):
    """Shown to the user as an error alert; form fields are kept."""


class NotAuthenticated(FormError):
    pass


class PassKeyRejected(FormError):
    pass


class LocationRequired(FormError):
    """Warning: nothing was sent because the location is empty."""


class SubmissionFailed(FormError):
    pass


class AttendanceFormClient:
    """
    Two states: unauthenticated until validate_pass_key succeeds, then
    authenticated for the rest of the session (there is no logout).
    """

    def __init__(self, base_url="", session=None, timeout=15):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

        self.authenticated = False
        self.options = {key: list(value) for key, value in DEFAULT_OPTIONS.items()}
        self.form = dict(DEFAULT_FORM)
        self.photo = None  # CompressedImage

    def _url(self, path):
        return f"{self.base_url}{path}"

    @staticmethod
    def _error_message(response, fallback):
        try:
            body = response.json() or {}
        except ValueError:
            return fallback
        return body.get("error") or fallback

    # ------------------------------------------------------------------
    # ACCESS GATE
    # ------------------------------------------------------------------
    def validate_pass_key(self, pass_key):
        try:
            response = self.session.post(self._url("/validate-key"), json={"passKey": pass_key}, timeout=self.timeout)
            body = response.json() or {}
        except (requests.RequestException, ValueError) as e:
            logger.warning("PassKey validation request failed: %s", e)
            raise PassKeyRejected("Failed to validate PassKey") from e

        if not body.get("success"):
            raise PassKeyRejected(body.get("error") or "Invalid PassKey")

        self.authenticated = True
        return True

    def _require_authenticated(self):
        if not self.authenticated:
            raise NotAuthenticated("Enter PassKey to access the attendance form")

    # ------------------------------------------------------------------
    # CONFIG
    # ------------------------------------------------------------------
    def load_config(self):
        """Fetch option lists; on failure the built-in defaults stay in place."""
        try:
            response = self.session.get(self._url("/config"), timeout=self.timeout)
            if response.status_code != 200:
                raise FormError(self._error_message(response, "Failed to fetch config"))
            data = (response.json() or {}).get("data") or {}
        except (requests.RequestException, ValueError, FormError) as e:
            logger.warning("Error fetching config: %s", e)
            return self.options

        self.options = {key: data.get(key) or [] for key in DEFAULT_OPTIONS}
        if data.get("latitude") and data.get("longitude"):
            self.set_location(data["latitude"], data["longitude"])
        return self.options

    # ------------------------------------------------------------------
    # FORM STATE
    # ------------------------------------------------------------------
    def update(self, **fields):
        unknown = set(fields) - set(DEFAULT_FORM)
        if unknown:
            raise KeyError(f"Unknown form fields: {', '.join(sorted(unknown))}")
        self.form.update(fields)

    def set_location(self, latitude, longitude):
        """Geolocation fix or marker drop: both coordinates replaced together."""
        self.form["latitude"] = str(latitude)
        self.form["longitude"] = str(longitude)

    def attach_photo(self, filename, data):
        try:
            self.photo = compress_image(filename, data)
        except ImageCompressionError as e:
            raise FormError("Failed to compress image") from e
        return self.photo

    def remove_photo(self):
        self.photo = None

    def clear(self):
        self.form = dict(DEFAULT_FORM)
        self.photo = None

    # ------------------------------------------------------------------
    # SUBMIT
    # ------------------------------------------------------------------
    def _upload_photo(self):
        try:
            response = self.session.post(
                self._url("/upload"),
                params={"filename": self.photo.filename},
                data=self.photo.data,
                headers={"Content-Type": self.photo.content_type},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SubmissionFailed("Failed to upload image") from e
        if response.status_code != 200:
            raise SubmissionFailed("Failed to upload image")
        return response.json()["url"]

    def _photo_data_uri(self):
        encoded = base64.b64encode(self.photo.data).decode("ascii")
        return f"data:{self.photo.content_type};base64,{encoded}"

    def submit(self):
        """
        Send the attendance. On success the employee id, notes and photo are
        cleared; on any failure nothing is cleared and FormError is raised.
        """
        self._require_authenticated()

        if not self.form.get("latitude") or not self.form.get("longitude"):
            raise LocationRequired("Please get your location first")

        photo_url = ""
        photo_base64 = ""
        if self.photo is not None:
            photo_url = self._upload_photo()
            photo_base64 = self._photo_data_uri()

        payload = dict(self.form, photoEvidence=photo_url, photoBase64=photo_base64)
        try:
            response = self.session.post(self._url("/attendance"), json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise SubmissionFailed(str(e)) from e

        if response.status_code != 201:
            raise SubmissionFailed(self._error_message(response, "Failed to submit"))

        result = response.json()
        self.form["information"] = ""
        self.form["employeeId"] = ""
        self.photo = None
        logger.info("Attendance submitted: %s", (result.get("data") or {}).get("_id"))
        return result
