from flask import request, jsonify, Blueprint, current_app
from app.extensions import db
from app.services import contribution_service
from app.api.swagger_helpers import with_pagination, with_example_file

contributions_bp = Blueprint("contributions", __name__)


@contributions_bp.route("/contributions", methods=["POST"])
@with_example_file("api/examples/contribution_example.json")
def submit_contribution():
    """Submit a prompt for review.

    ---
    tags:
      - Contributions
    responses:
      200:
        description: Contribution stored with status pending
      400:
        description: Missing title, role or content
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Request body must be a JSON object."}), 400
    try:
        contribution = contribution_service.submit_contribution(payload)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return jsonify({"error": "Failed to save contribution"}), 500

    # Contributor details are not echoed back.
    return jsonify({
        "message": "Contribution submitted successfully",
        "id": contribution.id,
        "status": contribution.status,
        "created_at": contribution.to_dict()["created_at"],
    })


@contributions_bp.route("/contributions", methods=["GET"])
@with_pagination
def list_contributions():
    """List contributions for review.

    ---
    tags:
      - Contributions
    parameters:
      - in: query
        name: status
        schema:
          type: string
        description: pending (default), approved, rejected or all
      - in: query
        name: limit
        schema:
          type: integer
        description: Legacy alias of pageSize
    """
    try:
        return jsonify(contribution_service.list_contributions(request.args))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.exception(e)
        return jsonify({"error": "Failed to fetch contributions"}), 500


@contributions_bp.route("/contributions/stats", methods=["GET"])
def contribution_stats():
    """Contribution counts per status.
    ---
    tags:
      - Contributions
    """
    try:
        return jsonify(contribution_service.get_contribution_stats())
    except Exception as e:
        current_app.logger.exception(e)
        return jsonify({"error": str(e)}), 500


@contributions_bp.route("/contributions/<contribution_id>", methods=["GET"])
def get_contribution(contribution_id):
    try:
        contribution = contribution_service.get_contribution(contribution_id)
    except Exception as e:
        current_app.logger.exception(e)
        return jsonify({"error": "Internal server error"}), 500
    if contribution is None:
        return jsonify({"error": "Contribution not found"}), 404
    return jsonify(contribution.to_dict())


@contributions_bp.route("/contributions/<contribution_id>", methods=["PATCH"])
def review_contribution(contribution_id):
    """Approve or reject a contribution.

    ---
    tags:
      - Contributions
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            status:
              type: string
              enum: [pending, approved, rejected]
            adminNotes:
              type: string
            reviewedBy:
              type: string
            publishToPrompts:
              type: boolean
    responses:
      200:
        description: Contribution updated
      400:
        description: Invalid status
      404:
        description: Contribution not found
    """
    payload = request.get_json(silent=True) or {}
    try:
        contribution = contribution_service.review_contribution(
            contribution_id,
            payload.get("status"),
            admin_notes=payload.get("adminNotes"),
            reviewed_by=payload.get("reviewedBy"),
            publish_to_prompts=bool(payload.get("publishToPrompts")),
        )
    except ValueError as e:
        db.session.rollback()
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return jsonify({"error": str(e)}), 500

    if contribution is None:
        return jsonify({"error": "Contribution not found"}), 404
    return jsonify({
        "message": "Contribution updated successfully",
        "contribution": contribution.to_dict(),
        "publishedPromptId": contribution.published_prompt_id,
    })


@contributions_bp.route("/contributions/<contribution_id>", methods=["DELETE"])
def delete_contribution(contribution_id):
    """Delete a contribution.
    ---
    tags:
      - Contributions
    responses:
      200:
        description: Deleted
      404:
        description: Contribution not found
    """
    try:
        if not contribution_service.delete_contribution(contribution_id):
            return jsonify({"error": "Contribution not found"}), 404
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return jsonify({"error": "Failed to delete contribution"}), 500
    return jsonify({"message": "Contribution deleted successfully"})
