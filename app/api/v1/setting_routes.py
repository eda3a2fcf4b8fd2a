from flask import request, jsonify, Blueprint, current_app
from app.extensions import db
from app.services import setting_service
from app.settings import settings

settings_bp = Blueprint('settings', __name__)


@settings_bp.route('/settings', methods=['GET'])
def get_settings():
    """Get the effective application settings.
    ---
    tags:
      - Settings
    responses:
      200:
        description: Defaults merged with persisted overrides.
    """
    return jsonify(settings.as_dict())


@settings_bp.route('/settings/<string:key>', methods=['GET'])
def get_setting(key: str):
    """Get a single setting by key."""
    if key not in settings.as_dict():
        return jsonify({"error": "Setting not found"}), 404
    return jsonify({"key": key, "value": getattr(settings, key)})


@settings_bp.route('/settings/<string:key>', methods=['PUT'])
def put_setting(key: str):
    """Persist a setting and apply it process-wide.
    ---
    tags:
      - Settings
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            value: {}
          example:
            value: en
    """
    payload = request.get_json(silent=True)
    if payload is None or 'value' not in payload:
        return jsonify({"error": "Request body must be JSON and include 'value' field."}), 400
    try:
        new_value = settings.save(key, payload['value'])
        return jsonify({"key": key, "value": new_value})
    except KeyError:
        return jsonify({"error": "Setting not found"}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return jsonify({"error": str(e)}), 500


@settings_bp.route('/settings/<string:key>', methods=['DELETE'])
def delete_setting(key: str):
    """Drop a persisted override; the default applies again."""
    try:
        deleted = setting_service.delete_setting(key)
        if not deleted:
            return jsonify({"error": "Setting not found"}), 404
        settings.load()
        return jsonify({"key": key, "deleted": True})
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return jsonify({"error": str(e)}), 500
