from flask import Blueprint, render_template

form_bp = Blueprint("form", __name__, template_folder="templates")


# Attendance form page; the passkey gate and submission run client-side
@form_bp.route("/")
def index():
    return render_template("attendance_form.html")
