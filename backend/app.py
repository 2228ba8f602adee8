import os
import sys
from typing import Optional

from flask import Flask
from flask_cors import CORS

from core.config import load_environment

# Load environment variables BEFORE building routes
load_environment()

from accounts.service import AccountService
from api.routes import build_service, create_api
from core.logger import logger

DEV_CORS_ORIGINS = 'http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173'


def create_app(service: Optional[AccountService] = None) -> Flask:
    """Build the Flask app; the Google Sheets backed service is created unless one is given."""
    app = Flask(__name__)

    # CORS configuration - require explicit origins (no wildcard default)
    cors_origins = os.getenv('CORS_ORIGINS', '')
    if not cors_origins:
        if '--dev' in sys.argv or os.getenv('FLASK_ENV') == 'development':
            cors_origins = DEV_CORS_ORIGINS
            logger.warning("Using default CORS origins for development. Set CORS_ORIGINS in production!")
        else:
            raise ValueError("CORS_ORIGINS environment variable must be set in production")

    CORS(app, origins=cors_origins.split(','))

    if service is None:
        service = build_service()

    app.register_blueprint(create_api(service), url_prefix='/api')

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint"""
        return {'status': 'ok', 'message': 'Backend is running', 'store': service is not None}, 200

    @app.route('/', methods=['GET'])
    def root():
        """Front-end entry point; the page itself is served separately."""
        return {'status': 'ok', 'message': 'Student Account Lookup API'}, 200

    return app


if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    create_app().run(host='0.0.0.0', port=port, debug=debug)
