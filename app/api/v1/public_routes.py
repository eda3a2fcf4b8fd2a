from flask import request, jsonify, Blueprint, current_app
from app.services import public_prompt_service
from app.settings import settings

public_bp = Blueprint("public_prompts", __name__)


def _language():
    return request.args.get("lang") or settings.LANGUAGE


@public_bp.route("/public-prompts", methods=["GET"])
def get_public_prompts():
    """List the bundled public prompt collection.

    ---
    tags:
      - Public prompts
    parameters:
      - in: query
        name: lang
        schema:
          type: string
        description: "zh selects prompts-cn.md, anything else prompts-en.md"
      - in: query
        name: category
        schema:
          type: string
    responses:
      200:
        description: "{prompts: [{category, role, prompt}], language, total, warnings}"
      404:
        description: Collection file not found
    """
    language = _language()
    try:
        result = public_prompt_service.load_public_prompts(language)
    except FileNotFoundError:
        return jsonify({"error": "File not found"}), 404
    except Exception as e:
        current_app.logger.exception(e)
        return jsonify({"error": "Internal server error"}), 500

    result = public_prompt_service.filter_by_category(result, request.args.get("category"))
    body = result.to_dict()
    body["language"] = language
    return jsonify(body)


@public_bp.route("/public-prompts/categories", methods=["GET"])
def get_public_categories():
    """Categories of the public collection with entry counts.
    ---
    tags:
      - Public prompts
    """
    language = _language()
    try:
        categories = public_prompt_service.list_categories(language)
    except FileNotFoundError:
        return jsonify({"error": "File not found"}), 404
    except Exception as e:
        current_app.logger.exception(e)
        return jsonify({"error": "Internal server error"}), 500
    return jsonify({"language": language, "categories": categories})
