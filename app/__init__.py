"""
Flask Application Factory
"""

import logging
import os

from flask import Flask, jsonify
from config import config
from extensions import db, migrate, jwt, bcrypt, cors, limiter, mail
from app.utils.exceptions import AppException


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    setup_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)
    cors.init_app(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization", app.config['USER_ID_HEADER']]
        }
    })
    limiter.init_app(app)
    mail.init_app(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Create database tables (models are imported by the blueprints)
    with app.app_context():
        db.create_all()

    return app


def setup_logging(app):
    """Send app logs to the console at LOG_LEVEL"""
    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO').upper(), logging.INFO)

    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    app.logger.setLevel(log_level)
    app.logger.addHandler(console_handler)

    return app.logger


def register_blueprints(app):
    """Register Flask blueprints"""
    from app.api.auth import auth_bp
    from app.api.appointments import appointments_bp
    from app.api.blocked_dates import blocked_dates_bp
    from app.api.admin import admin_bp
    from app.api.clients import clients_bp
    from app.api.email import email_bp

    # API v1
    app.register_blueprint(auth_bp, url_prefix='/api/v1/auth')
    app.register_blueprint(appointments_bp, url_prefix='/api/v1/appointments')
    app.register_blueprint(blocked_dates_bp, url_prefix='/api/v1/blocked-dates')
    app.register_blueprint(admin_bp, url_prefix='/api/v1/admin')
    app.register_blueprint(clients_bp, url_prefix='/api/v1/clients')
    app.register_blueprint(email_bp, url_prefix='/api/v1/email')

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return jsonify({'status': 'healthy', 'message': 'API is running'}), 200

    @app.route('/')
    def index():
        return jsonify({
            'message': 'Welcome to the Appointment Booking API',
            'version': '1.0.0',
            'endpoints': {
                'auth': '/api/v1/auth',
                'appointments': '/api/v1/appointments',
                'blocked_dates': '/api/v1/blocked-dates',
                'admin': '/api/v1/admin',
                'clients': '/api/v1/clients',
                'email': '/api/v1/email'
            }
        }), 200


def register_error_handlers(app):
    """Register error handlers"""

    @app.errorhandler(AppException)
    def app_exception(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({'error': 'Bad Request', 'message': str(error), 'status_code': 400}), 400

    @app.errorhandler(401)
    def unauthorized(error):
        return jsonify({'error': 'Unauthorized', 'message': 'Authentication required', 'status_code': 401}), 401

    @app.errorhandler(403)
    def forbidden(error):
        return jsonify({'error': 'Forbidden', 'message': 'Insufficient permissions', 'status_code': 403}), 403

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'NotFound', 'message': 'Resource not found', 'status_code': 404}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method Not Allowed', 'message': str(error), 'status_code': 405}), 405

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({'error': 'Too Many Requests', 'message': str(error), 'status_code': 429}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'error': 'Internal Server Error', 'message': 'An unexpected error occurred', 'status_code': 500}), 500
