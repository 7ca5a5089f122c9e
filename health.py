from flask import Blueprint, current_app, jsonify

health_bp = Blueprint('health', __name__)

VERSION = '1.0.0'


@health_bp.route('/health')
def health_check():
    """Health check endpoint for external monitoring"""
    return jsonify({
        'status': 'ok',
        'message': 'Service is running',
        'version': VERSION,
        'storage_key': current_app.config['STORAGE_KEY'],
    })
