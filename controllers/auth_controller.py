from flask import Blueprint, request

from services.access_gate import validate_pass_key
from utils.helpers import success_response

auth_bp = Blueprint("auth", __name__)


# Validate PassKey
@auth_bp.route("/validate-key", methods=["POST"])
def validate_key():
    data = request.get_json(silent=True) or {}
    validate_pass_key(data.get("passKey"))
    return success_response(message="PassKey Validated")
