from utils.db import mongo
from utils.helpers import serialize_document
from datetime import datetime, timezone


class AttendanceRecord:
    """One check-in/check-out submission. Records are append-only."""

    # Request keys that are persisted; anything else (e.g. photoBase64) is dropped
    FIELDS = ("apkVersion", "employeeId", "presenceType", "latitude", "longitude",
              "workType", "information", "photoEvidence")

    REQUIRED_FIELDS = ("employeeId", "latitude", "longitude")

    @staticmethod
    def collection():
        return mongo.db.attendances

    def __init__(self, employee_id, latitude, longitude, apk_version=None, presence_type=None,
                 work_type=None, information=None, photo_evidence=None, created_at=None, _id=None):
        self._id = _id
        self.apk_version = apk_version
        self.employee_id = employee_id
        self.presence_type = presence_type
        self.latitude = latitude
        self.longitude = longitude
        self.work_type = work_type
        self.information = information
        self.photo_evidence = photo_evidence
        self.created_at = created_at or datetime.now(timezone.utc)

    @classmethod
    def from_request(cls, data):
        return cls(
            apk_version=data.get("apkVersion"),
            employee_id=data.get("employeeId"),
            presence_type=data.get("presenceType"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            work_type=data.get("workType"),
            information=data.get("information"),
            photo_evidence=data.get("photoEvidence") or None,
        )

    @classmethod
    def from_document(cls, doc):
        return cls(
            _id=doc.get("_id"),
            apk_version=doc.get("apkVersion"),
            employee_id=doc.get("employeeId"),
            presence_type=doc.get("presenceType"),
            latitude=doc.get("latitude"),
            longitude=doc.get("longitude"),
            work_type=doc.get("workType"),
            information=doc.get("information"),
            photo_evidence=doc.get("photoEvidence"),
            created_at=doc.get("createdAt"),
        )

    def to_dict(self):
        return {
            "apkVersion": self.apk_version,
            "employeeId": self.employee_id,
            "presenceType": self.presence_type,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "workType": self.work_type,
            "information": self.information,
            "photoEvidence": self.photo_evidence,
            "createdAt": self.created_at,
        }

    def to_json(self):
        doc = self.to_dict()
        if self._id is not None:
            doc = {"_id": self._id, **doc}
        return serialize_document(doc)

    @property
    def id(self):
        return self._id

    # Insert only; there is no update or delete
    def save(self):
        result = self.collection().insert_one(self.to_dict())
        self._id = result.inserted_id
        return self

    @staticmethod
    def count():
        return AttendanceRecord.collection().count_documents({})

    @staticmethod
    def find_by_id(record_id):
        doc = AttendanceRecord.collection().find_one({"_id": record_id})
        return AttendanceRecord.from_document(doc) if doc else None
