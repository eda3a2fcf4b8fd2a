from flask import request, jsonify, Blueprint, current_app
from app.extensions import db
from app.services import tag_service

tags_bp = Blueprint("tags", __name__)


@tags_bp.route("/tags", methods=["GET"])
def get_tags():
    """List all tags.
    ---
    tags:
      - Tags
    responses:
      200:
        description: A list of tags sorted by name.
    """
    try:
        return jsonify(tag_service.get_all_tags())
    except Exception as e:
        current_app.logger.exception(e)
        return jsonify({"error": str(e)}), 500


@tags_bp.route("/tags", methods=["POST"])
def create_tag():
    """Create a tag. Omit `user_id` for a public tag.
    ---
    tags:
      - Tags
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            name:
              type: string
            user_id:
              type: string
    responses:
      201:
        description: Tag created
      400:
        description: Missing or duplicate name
    """
    payload = request.get_json(silent=True) or {}
    try:
        tag = tag_service.create_tag(payload.get("name"), user_id=payload.get("user_id"))
        return jsonify(tag.to_dict()), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return jsonify({"error": str(e)}), 500


@tags_bp.route("/tags/<tag_id>", methods=["PATCH"])
def update_tag(tag_id):
    """Rename a tag.
    ---
    tags:
      - Tags
    """
    payload = request.get_json(silent=True) or {}
    try:
        tag = tag_service.update_tag(tag_id, payload.get("name"))
        if tag is None:
            return jsonify({"error": "Tag not found"}), 404
        return jsonify(tag.to_dict())
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return jsonify({"error": str(e)}), 500


@tags_bp.route("/tags/<tag_id>", methods=["DELETE"])
def delete_tag(tag_id):
    """Delete a user tag. Public tags answer 403.
    ---
    tags:
      - Tags
    """
    try:
        if not tag_service.delete_tag(tag_id):
            return jsonify({"error": "Tag not found"}), 404
        return jsonify({"success": True})
    except PermissionError as e:
        return jsonify({"error": str(e)}), 403
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return jsonify({"error": str(e)}), 500
