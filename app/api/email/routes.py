"""
Email Routes (admin only)
"""

from flask import Blueprint, jsonify
from extensions import db
from app.models.user import User
from app.services.email_service import EmailService
from app.utils.decorators import admin_required, handle_errors
from app.utils.exceptions import InvalidArgument, NotFound, Unavailable
from app.utils.validators import json_body, require_text, validate_email

email_bp = Blueprint('email', __name__)


@email_bp.route('/test', methods=['POST'])
@handle_errors
@admin_required()
def test_email_service():
    """Check the mail server connection"""
    if not EmailService.test_connection():
        raise Unavailable('Email service connection failed')
    return jsonify({'message': 'Email service is working'}), 200


@email_bp.route('/welcome/<int:user_id>', methods=['POST'])
@handle_errors
@admin_required()
def send_welcome_email(user_id):
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('User not found')

    sent = EmailService.send_welcome_email(user)
    return jsonify({'message': 'Welcome email sent' if sent else 'Welcome email could not be sent', 'sent': sent}), 200


@email_bp.route('/custom', methods=['POST'])
@handle_errors
@admin_required()
def send_custom_email():
    """Send an arbitrary email"""
    data = json_body()

    to = data.get('to')
    if not validate_email(to):
        raise InvalidArgument('A valid recipient is required', details={'field': 'to'})
    subject = require_text(data.get('subject'), 'subject')
    html = require_text(data.get('html'), 'html')

    sent = EmailService.send_email(to, subject, html, data.get('text'))
    return jsonify({'message': 'Email sent' if sent else 'Email could not be sent', 'sent': sent}), 200
