from utils.db import mongo
from utils.helpers import serialize_document
from datetime import datetime, timezone

from pymongo import DESCENDING


class ConfigOption:
    """A selectable {value, name} pair shown in the form."""

    def __init__(self, value, name):
        self.value = value
        self.name = name

    @classmethod
    def normalize(cls, raw):
        """
        Build an option from a loosely shaped entry.
        A missing value falls back to the name and vice versa;
        returns None when the entry carries neither.
        """
        if isinstance(raw, str):
            raw = {"value": raw}
        if not isinstance(raw, dict):
            return None
        value = raw.get("value") or raw.get("name")
        name = raw.get("name") or raw.get("value")
        if not value:
            return None
        return cls(str(value), str(name))

    @classmethod
    def normalize_list(cls, raw_list):
        options = (cls.normalize(raw) for raw in raw_list or [])
        return [option for option in options if option is not None]

    def to_dict(self):
        return {"value": self.value, "name": self.name}

    def __eq__(self, other):
        return isinstance(other, ConfigOption) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"ConfigOption(value={self.value!r}, name={self.name!r})"


class Configuration:
    """
    Kind-tagged configuration document stored in the configs collection.

    kind "form"    -> option lists and the default map center
    kind "passKey" -> the shared passkey gating the form
    """

    FORM = "form"
    PASSKEY = "passKey"
    KINDS = (FORM, PASSKEY)

    OPTION_FIELDS = ("apkVersion", "presenceType", "workType")

    @staticmethod
    def collection():
        return mongo.db.configs

    def __init__(self, kind, apk_version=None, presence_type=None, work_type=None,
                 latitude=None, longitude=None, pass_key=None,
                 created_at=None, updated_at=None, _id=None):
        self._id = _id
        self.kind = kind
        self.apk_version = ConfigOption.normalize_list(apk_version)
        self.presence_type = ConfigOption.normalize_list(presence_type)
        self.work_type = ConfigOption.normalize_list(work_type)
        self.latitude = latitude
        self.longitude = longitude
        self.pass_key = pass_key
        self.created_at = created_at
        self.updated_at = updated_at

    @classmethod
    def from_document(cls, doc):
        return cls(
            _id=doc.get("_id"),
            kind=doc.get("type"),
            apk_version=doc.get("apkVersion"),
            presence_type=doc.get("presenceType"),
            work_type=doc.get("workType"),
            latitude=doc.get("latitude"),
            longitude=doc.get("longitude"),
            pass_key=doc.get("passKey"),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    def to_dict(self):
        return {
            "type": self.kind,
            "apkVersion": [o.to_dict() for o in self.apk_version],
            "presenceType": [o.to_dict() for o in self.presence_type],
            "workType": [o.to_dict() for o in self.work_type],
            "latitude": self.latitude,
            "longitude": self.longitude,
            "passKey": self.pass_key,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_public_json(self):
        """Client-facing view; the passkey never leaves the server."""
        doc = self.to_dict()
        doc.pop("passKey")
        if self._id is not None:
            doc = {"_id": self._id, **doc}
        return serialize_document(doc)

    # Latest document of a kind by update time
    @staticmethod
    def latest(kind):
        cursor = Configuration.collection().find({"type": kind}).sort("updatedAt", DESCENDING).limit(1)
        for doc in cursor:
            return Configuration.from_document(doc)
        return None

    @staticmethod
    def upsert(kind, fields):
        """
        Create or update the single document of a kind in place.
        Only keys present in fields are changed; updatedAt is always refreshed.
        """
        if kind not in Configuration.KINDS:
            raise ValueError(f"Unknown configuration kind: {kind}")

        now = datetime.now(timezone.utc)
        changes = dict(fields)
        for key in Configuration.OPTION_FIELDS:
            if key in changes:
                changes[key] = [o.to_dict() for o in ConfigOption.normalize_list(changes[key])]
        if changes.get("passKey") is not None:
            changes["passKey"] = str(changes["passKey"])
        changes.pop("type", None)
        changes.pop("_id", None)
        changes["updatedAt"] = now

        Configuration.collection().update_one(
            {"type": kind},
            {"$set": changes, "$setOnInsert": {"type": kind, "createdAt": now}},
            upsert=True,
        )
        return Configuration.latest(kind)
