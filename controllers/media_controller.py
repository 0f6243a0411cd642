from flask import Blueprint, current_app, jsonify, request, send_from_directory

from services.media_service import upload_image

media_bp = Blueprint("media", __name__)


# ==========================================================
# UPLOAD PHOTO (raw body, ?filename=<name>)
# ==========================================================
@media_bp.route("/upload", methods=["POST"])
def upload():
    filename = request.args.get("filename")
    blob = upload_image(filename, request.stream, request.content_length)
    return jsonify(blob)


# Serve photos stored by the local blob backend
@media_bp.route("/uploads/<path:filename>")
def serve_upload(filename):
    return send_from_directory(
        current_app.config["UPLOAD_FOLDER"],
        filename,
        as_attachment=request.args.get("download") == "1",
    )
