"""
Routes module for EV Journal Flask blueprints.
"""

from .engine import engine_bp

__all__ = [
    "engine_bp",
]


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(engine_bp, url_prefix="/api")
