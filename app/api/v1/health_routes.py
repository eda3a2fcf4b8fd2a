from datetime import datetime, timezone
from flask import jsonify, Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.extensions import db

health_bp = Blueprint("health", __name__)

SERVICE_NAME = "PromptMinder"


@health_bp.route("/health", methods=["GET"])
def health():
    """Service health including a database round-trip.
    ---
    tags:
      - Health
    responses:
      200:
        description: healthy
      500:
        description: unhealthy
    """
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        current_app.logger.error("Health check failed: %s", e)
        return jsonify({"status": "unhealthy", "error": str(e), "timestamp": timestamp, "service": SERVICE_NAME}), 500
    return jsonify({"status": "healthy", "timestamp": timestamp, "service": SERVICE_NAME})
