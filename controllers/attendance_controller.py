from flask import Blueprint, request

from services import attendance_service
from utils.helpers import success_response

attendance_bp = Blueprint("attendance", __name__)


# ==========================================================
# SUBMIT ATTENDANCE
# ==========================================================
@attendance_bp.route("/attendance", methods=["POST"])
def submit_attendance():
    data = request.get_json(silent=True)
    record = attendance_service.submit(data)
    return success_response(record.to_json(), status_code=201)
