from flask import Blueprint

# Import individual route blueprints
from .setting_routes import settings_bp
from .prompt_routes import prompts_bp
from .public_routes import public_bp
from .tag_routes import tags_bp
from .contribution_routes import contributions_bp
from .health_routes import health_bp

# Create a master blueprint for the v1 API
api_v1 = Blueprint('api_v1', __name__)

# Register the individual blueprints onto the master v1 blueprint
api_v1.register_blueprint(settings_bp)
api_v1.register_blueprint(prompts_bp)
api_v1.register_blueprint(public_bp)
api_v1.register_blueprint(tags_bp)
api_v1.register_blueprint(contributions_bp)
api_v1.register_blueprint(health_bp)
