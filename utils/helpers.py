"""Helper functions for JSON responses and document serialization."""
from datetime import datetime

from bson import ObjectId
from flask import jsonify


def success_response(data=None, message=None, status_code=200):
    """Return consistent success response."""
    response = {"success": True}
    if message is not None:
        response["message"] = message
    if data is not None:
        response["data"] = data
    return jsonify(response), status_code


def error_response(message, status_code=400):
    """Return consistent error response."""
    return jsonify({"success": False, "error": message}), status_code


def serialize_document(doc):
    """Make a MongoDB document JSON-safe (ObjectId -> str, datetime -> ISO 8601)."""
    if isinstance(doc, dict):
        return {key: serialize_document(value) for key, value in doc.items()}
    if isinstance(doc, list):
        return [serialize_document(value) for value in doc]
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, datetime):
        return doc.isoformat()
    return doc
