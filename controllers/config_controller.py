from flask import Blueprint

from services.config_service import get_latest_config
from utils.helpers import success_response

config_bp = Blueprint("config", __name__)


# Latest form configuration (option lists + default map center)
@config_bp.route("/config", methods=["GET"])
def get_config():
    config = get_latest_config()
    return success_response(config.to_public_json())
