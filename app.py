import logging
import os

from flask import Flask, jsonify, request

from config import INSTANCE_PATH, get_config
from health import health_bp
from models import db
from security import init_security
from views import main_bp

logger = logging.getLogger(__name__)


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    app.logger.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({'success': False, 'error': 'Not found', 'path': request.path}), 404

    @app.errorhandler(413)
    def too_large(e):
        return jsonify({'success': False, 'error': 'Uploaded file is too large'}), 413


def create_app(config_object=None):
    """Build the Flask application"""
    app = Flask(__name__, instance_path=INSTANCE_PATH)
    app.config.from_object(config_object or get_config())

    configure_logging(app)

    # Set up instance path for SQLite and other app data
    if not os.path.exists(app.instance_path):
        os.makedirs(app.instance_path)

    db.init_app(app)
    init_security(app)

    app.register_blueprint(main_bp)
    app.register_blueprint(health_bp)
    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    logger.info("ScholarFlow started with storage slot %s", app.config['STORAGE_KEY'])
    return app
