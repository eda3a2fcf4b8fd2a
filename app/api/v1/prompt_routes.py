from flask import request, jsonify, Blueprint, current_app
from app.extensions import db
from app.services import prompt_service
from app.services.prompt_variables import analyze_prompt_variables, replace_variables
from app.api.pagination import has_pagination_args
from app.api.swagger_helpers import with_pagination, with_example_file


prompts_bp = Blueprint("prompts", __name__)


def _err(msg, status=400):
    return jsonify({"error": str(msg)}), status


def _with_versions(prompt, public_only=False):
    data = prompt.to_dict()
    data["versions"] = [
        v.to_version_dict() for v in prompt_service.get_prompt_versions(prompt, public_only=public_only)
    ]
    return data


@prompts_bp.route("/prompts", methods=["GET"])
@with_pagination
def get_prompts():
    """List prompts, newest first.
    Returns a plain array unless pagination parameters are given.

    ---
    tags:
      - Prompts
    parameters:
      - in: query
        name: tag
        schema:
          type: string
        description: Case-insensitive substring match on tags
      - in: query
        name: title
        schema:
          type: string
        description: Exact title match
      - in: query
        name: user_id
        schema:
          type: string
    responses:
      200:
        description: A list of prompts.
    """
    args = request.args or {}
    try:
        if has_pagination_args(args):
            return jsonify(prompt_service.list_prompts_page(args))
        prompts = prompt_service.list_prompts(
            tag=args.get("tag"), title=args.get("title"), user_id=args.get("user_id")
        )
        return jsonify([p.to_dict() for p in prompts])
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts", methods=["POST"])
@with_example_file("api/examples/prompt_example.json")
def create_prompt():
    """Create a prompt.

    ---
    tags:
      - Prompts
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          required: [title, content]
          properties:
            title:
              type: string
            content:
              type: string
            description:
              type: string
            tags:
              type: string
            version:
              type: string
            is_public:
              type: boolean
            parent_id:
              type: string
              description: Create the prompt as a new version of this prompt's group
    responses:
      201:
        description: Prompt created
      400:
        description: Missing title or content
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _err("Request body must be a JSON object.", 400)
    try:
        prompt = prompt_service.create_prompt(payload)
        return jsonify(prompt.to_dict()), 201
    except ValueError as e:
        db.session.rollback()
        return _err(e, 400)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/versions", methods=["GET"])
def get_version_labels():
    """Distinct version labels of public prompts sharing a title, newest first.

    ---
    tags:
      - Prompts
    parameters:
      - in: query
        name: title
        required: true
        schema:
          type: string
    responses:
      200:
        description: "{title, versions}"
      400:
        description: Missing title
    """
    title = request.args.get("title")
    try:
        return jsonify({"title": title, "versions": prompt_service.get_version_labels(title)})
    except ValueError as e:
        return _err(e, 400)
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/versions/records", methods=["GET"])
def get_version_records():
    """Every stored row with the given title, public or private, newest first.

    ---
    tags:
      - Prompts
    parameters:
      - in: query
        name: title
        required: true
        schema:
          type: string
    responses:
      200:
        description: "{title, versions: [prompt]}"
      400:
        description: Missing title
    """
    title = request.args.get("title")
    try:
        rows = prompt_service.get_version_records(title)
        return jsonify({"title": title, "versions": [p.to_dict() for p in rows]})
    except ValueError as e:
        return _err(e, 400)
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<prompt_id>", methods=["GET"])
def get_prompt(prompt_id):
    """Get a prompt with every version of its group.

    ---
    tags:
      - Prompts
    responses:
      200:
        description: Prompt with `versions` [{id, version, created_at}]
      404:
        description: Prompt not found
    """
    try:
        prompt = prompt_service.get_prompt_by_id(prompt_id)
        if prompt is None:
            return _err("Prompt not found", 404)
        return jsonify(_with_versions(prompt))
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<prompt_id>", methods=["PUT"])
@with_example_file("api/examples/prompt_example.json")
def update_prompt(prompt_id):
    """Update the editable fields of a prompt.

    ---
    tags:
      - Prompts
    responses:
      200:
        description: Prompt updated
      400:
        description: Bad request
      404:
        description: Prompt not found
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not payload:
        return _err("No data provided.", 400)
    try:
        prompt = prompt_service.update_prompt(prompt_id, payload)
        if prompt is None:
            return _err("Prompt not found", 404)
        return jsonify(prompt.to_dict())
    except ValueError as e:
        db.session.rollback()
        return _err(e, 400)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<prompt_id>", methods=["DELETE"])
def delete_prompt(prompt_id):
    """Delete a prompt.

    ---
    tags:
      - Prompts
    responses:
      200:
        description: Deleted
      404:
        description: Not found
    """
    try:
        if not prompt_service.delete_prompt(prompt_id):
            return _err("Prompt not found", 404)
        return jsonify({"message": "Prompt deleted successfully"})
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<prompt_id>/versions", methods=["POST"])
def create_prompt_version(prompt_id):
    """Snapshot a new version of a prompt.

    Fields not given are copied from the source prompt; `version` is required.
    ---
    tags:
      - Prompts
    responses:
      201:
        description: Version created
      400:
        description: Missing version
      404:
        description: Source prompt not found
    """
    payload = request.get_json(silent=True) or {}
    try:
        version = prompt_service.create_version(prompt_id, payload)
        if version is None:
            return _err("Prompt not found", 404)
        return jsonify(version.to_dict()), 201
    except ValueError as e:
        db.session.rollback()
        return _err(e, 400)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<prompt_id>/share", methods=["POST"])
def share_prompt(prompt_id):
    """Make a prompt public.
    ---
    tags:
      - Prompts
    """
    try:
        if prompt_service.share_prompt(prompt_id) is None:
            return _err("Prompt not found", 404)
        return jsonify({"message": "Prompt shared successfully"})
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/copy", methods=["POST"])
def copy_prompt():
    """Copy a prompt into a new private prompt with version 1.0.0.
    ---
    tags:
      - Prompts
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            sourceId:
              type: string
            user_id:
              type: string
    """
    payload = request.get_json(silent=True) or {}
    source_id = payload.get("sourceId") or payload.get("source_id")
    if not source_id:
        return _err("Missing sourceId", 400)
    try:
        copy = prompt_service.copy_prompt(source_id, user_id=payload.get("user_id"))
        if copy is None:
            return _err("Prompt not found", 404)
        return jsonify({"message": "Prompt copied successfully", "prompt": copy.to_dict()})
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/prompts/<prompt_id>/render", methods=["POST"])
def render_prompt(prompt_id):
    """Fill `{{variable}}` placeholders of a prompt.
    ---
    tags:
      - Prompts
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            variables:
              type: object
              additionalProperties:
                type: string
    """
    payload = request.get_json(silent=True) or {}
    values = payload.get("variables") or {}
    if not isinstance(values, dict):
        return _err("'variables' must be an object", 400)
    try:
        prompt = prompt_service.get_prompt_by_id(prompt_id)
        if prompt is None:
            return _err("Prompt not found", 404)
        analysis = analyze_prompt_variables(prompt.content)
        missing = [v["name"] for v in analysis["variables"] if v["name"] not in values]
        return jsonify({
            "id": prompt.id,
            "content": replace_variables(prompt.content, values),
            "variables": analysis["variables"],
            "missing": missing,
        })
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)


@prompts_bp.route("/share/<prompt_id>", methods=["GET"])
def get_shared_prompt(prompt_id):
    """Read a public prompt with the public versions of its group.

    ---
    tags:
      - Share
    responses:
      200:
        description: Prompt with `versions` [{id, version, created_at}]
      404:
        description: Prompt not found or not public
    """
    try:
        prompt = prompt_service.get_prompt_by_id(prompt_id)
        if prompt is None or not prompt.is_public:
            return _err("Prompt not found or not public", 404)
        return jsonify(_with_versions(prompt, public_only=True))
    except Exception as e:
        current_app.logger.exception(e)
        return _err(e, 500)
