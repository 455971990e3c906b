"""Flask application factory and development server entry point."""

import logging
from datetime import datetime

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from . import config
from .logging_config import configure_logging
from .routes import api_bp

logger = logging.getLogger(__name__)


def create_app(test_config=None):
    app = Flask(__name__)
    app.json.sort_keys = False
    if test_config:
        app.config.update(test_config)

    app.register_blueprint(api_bp)

    @app.route('/health')
    def health():
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now().isoformat(),
            'openaiConfigured': config.openai_configured(),
        })

    @app.errorhandler(404)
    def not_found_error(e):
        return jsonify({'error': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return jsonify({'error': e.name}), e.code
        logger.exception(f"Unhandled exception: {e}")
        return jsonify({'error': 'An unexpected error occurred'}), 500

    return app


def main():
    configure_logging()
    app = create_app()
    port = config.get_port()
    logger.info(f"[SERVER] Starting on port {port}")
    logger.info(f"OpenAI API key configured: {'Yes' if config.openai_configured() else 'No'}")
    app.run(host=config.get_host(), port=port)


if __name__ == '__main__':
    main()
