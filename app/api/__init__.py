"""API blueprints for the fatigue assessment backend."""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("api", __name__, url_prefix="/api")


# Import and register all resource blueprints
# Note: Imports are done after api_bp creation to avoid circular imports
from app.api.admin import admin_bp  # noqa: E402
from app.api.auth import auth_bp  # noqa: E402
from app.api.health import health_bp  # noqa: E402
from app.api.mobile import mobile_bp  # noqa: E402

api_bp.register_blueprint(admin_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(auth_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(health_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(mobile_bp)  # type: ignore[attr-defined]
