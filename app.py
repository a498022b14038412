# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from sqlalchemy import text
from routes.bible import bible_bp
from routes.daily_verses import daily_verses_bp
from routes.quotes import quotes_bp
from routes.common import LIBRARY_KEY
from config import Config
from database import get_db_session
import os
import logging
import time
import sys
from werkzeug.middleware.proxy_fix import ProxyFix

# Configure logging to output to stdout
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def create_app(session_factory=None, library=None):
    """Build the Flask app.

    ``session_factory`` overrides the module-level ``SessionLocal`` and
    ``library`` pre-seeds the immutable book/translation snapshot; both
    exist for tests. Without a library the snapshot is loaded on first use.
    """
    app = Flask(__name__)

    # Use ProxyFix to handle proxy headers properly
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024
    app.config['CORS_HEADERS'] = 'Content-Type'
    app.config['SESSION_FACTORY'] = session_factory

    CORS(app, resources={
        r"/api/*": {
            "origins": Config.CORS_ORIGINS.split(',') if Config.CORS_ORIGINS != '*' else '*',
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type"],
            "expose_headers": ["Content-Type"],
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    app.extensions[LIBRARY_KEY] = library

    app.register_blueprint(bible_bp)
    app.register_blueprint(daily_verses_bp)
    app.register_blueprint(quotes_bp)

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - g.get('start_time', time.time())
        logger.info(f"Request to {request.path} took {duration:.2f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint that also verifies the database connection"""
        try:
            with get_db_session(app.config['SESSION_FACTORY']) as db:
                db.execute(text('SELECT 1'))
            return jsonify({
                'status': 'healthy',
                'database': 'connected',
                'timestamp': time.time()
            })
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            return jsonify({
                'status': 'unhealthy',
                'error': str(e),
                'timestamp': time.time()
            }), 500

    return app


app = create_app()

if __name__ == '__main__':
    logger.info("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    app.run(debug=True, port=port)
