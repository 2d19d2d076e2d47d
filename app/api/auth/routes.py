"""
Authentication Routes
"""

from flask import Blueprint, request, jsonify, g, current_app
from flask_jwt_extended import create_access_token
from extensions import db, limiter
from app.models.user import User
from app.services.email_service import EmailService
from app.utils.decorators import handle_errors, user_required
from app.utils.decorators.admin_required import ensure_self_or_admin
from app.utils.exceptions import Conflict, InvalidArgument, NotFound, Unauthorized
from app.utils.validators import json_body, parse_dob, require_text, validate_email, validate_phonenumber

auth_bp = Blueprint('auth', __name__)

MIN_PASSWORD_LENGTH = 8


def check_password_strength(password):
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidArgument(
            f'Password must be at least {MIN_PASSWORD_LENGTH} characters long',
            details={'field': 'password'}
        )


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("5 per hour")
@handle_errors
def register():
    """Register a new user"""
    data = json_body()

    # Validate required fields
    required_fields = ['name', 'email', 'password', 'phonenumber']
    for field in required_fields:
        if not data.get(field):
            raise InvalidArgument(f'{field} is required', details={'field': field})

    name = require_text(data['name'], 'name')
    if not validate_email(data['email']):
        raise InvalidArgument('Invalid email address', details={'field': 'email'})
    if not validate_phonenumber(data['phonenumber']):
        raise InvalidArgument(
            'Invalid Irish mobile number. Must start with 08 followed by 3-9 and 7 digits.',
            details={'field': 'phonenumber'}
        )
    check_password_strength(data['password'])
    dob = parse_dob(data.get('dob'))

    # Check if user already exists
    if User.find_by_email(data['email']):
        raise Conflict('Email already registered')

    user = User(
        email=data['email'],
        password=data['password'],
        name=name,
        phonenumber=data['phonenumber'],
        dob=dob,
    )

    db.session.add(user)
    db.session.commit()

    EmailService.send_welcome_email(user)

    access_token = create_access_token(identity=str(user.id))

    return jsonify({
        'message': 'User registered successfully',
        'user': user.to_dict(),
        'access_token': access_token
    }), 201


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("50 per hour")
@handle_errors
def login():
    """Login user"""
    data = json_body()

    if not data.get('email') or not data.get('password'):
        raise InvalidArgument('Email and password are required')

    user = User.find_by_email(data['email'])

    if not user or not user.check_password(data['password']):
        raise Unauthorized('Invalid credentials')

    EmailService.send_login_notification(user, request.remote_addr)

    access_token = create_access_token(identity=str(user.id))
    current_app.logger.info(f'User {user.id} logged in')

    return jsonify({
        'message': 'Login successful',
        'user': user.to_dict(),
        'access_token': access_token
    }), 200


@auth_bp.route('/update-password/<int:user_id>', methods=['PUT'])
@handle_errors
@user_required()
def update_password(user_id):
    """Change a password; admins may skip the current password check"""
    ensure_self_or_admin(user_id)

    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('User not found')

    data = json_body()
    new_password = data.get('newPassword')
    check_password_strength(new_password)

    if not g.current_user.is_admin or g.current_user.id == user_id:
        if not user.check_password(data.get('currentPassword') or ''):
            raise Unauthorized('Current password is incorrect')

    user.set_password(new_password)
    db.session.commit()

    EmailService.send_password_updated_email(user)

    return jsonify({'message': 'Password updated successfully'}), 200
