"""
EV Journal - Flask Application

Stateless JSON API over the charge, trip and maintenance derivation engine.
"""

import logging

from flask import Flask, jsonify

from .config import Config
from .routes import register_blueprints

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config_object=Config) -> Flask:
    """Build the Flask app with every blueprint registered."""
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_object)
    register_blueprints(flask_app)

    @flask_app.route('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    return flask_app


app = create_app()


# ============================================================================
# Main
# ============================================================================

if __name__ == '__main__':
    app.run(host=Config.FLASK_HOST, port=Config.FLASK_PORT, debug=Config.DEBUG)
