"""
Clients Routes
Admin management of customer accounts (users with the user role)
"""

import secrets

from flask import Blueprint, jsonify
from extensions import db
from app.models.user import User, UserRole
from app.utils.decorators import admin_required, handle_errors
from app.utils.exceptions import Conflict, InvalidArgument, NotFound
from app.utils.validators import json_body, require_text, validate_email, validate_phonenumber

clients_bp = Blueprint('clients', __name__)


def get_client_or_404(client_id):
    client = db.session.get(User, client_id)
    if not client or client.role != UserRole.USER:
        raise NotFound('Client not found')
    return client


def check_phone(phone):
    if phone and not validate_phonenumber(phone):
        raise InvalidArgument('Invalid Irish mobile number', details={'field': 'phone'})
    return phone or None


@clients_bp.route('/', methods=['GET'])
@handle_errors
@admin_required()
def get_clients():
    clients = User.query.filter_by(role=UserRole.USER).order_by(User.name).all()
    return jsonify([c.to_client_dict() for c in clients]), 200


@clients_bp.route('/', methods=['POST'])
@handle_errors
@admin_required()
def create_client():
    """Create a client account on someone's behalf"""
    data = json_body()

    name = require_text(data.get('name'), 'name')
    email = data.get('email')
    if not validate_email(email):
        raise InvalidArgument('Invalid email address', details={'field': 'email'})
    if User.find_by_email(email):
        raise Conflict('Email already registered')

    client = User(
        email=email,
        # Placeholder until an admin sets one through /auth/update-password
        password=secrets.token_urlsafe(16),
        name=name,
        phonenumber=check_phone(data.get('phone')),
        notes=data.get('notes'),
        role=UserRole.USER,
    )

    db.session.add(client)
    db.session.commit()

    return jsonify({'message': 'Client created successfully', 'client': client.to_client_dict()}), 201


@clients_bp.route('/<int:client_id>', methods=['PUT'])
@handle_errors
@admin_required()
def update_client(client_id):
    client = get_client_or_404(client_id)
    data = json_body()

    if 'name' in data:
        client.name = require_text(data['name'], 'name')
    if 'phone' in data:
        client.phonenumber = check_phone(data['phone'])
    if 'notes' in data:
        client.notes = data['notes']
    if 'email' in data:
        if not validate_email(data['email']):
            raise InvalidArgument('Invalid email address', details={'field': 'email'})
        existing = User.find_by_email(data['email'])
        if existing and existing.id != client.id:
            raise Conflict('Email already registered')
        client.email = data['email'].strip().lower()

    db.session.commit()

    return jsonify({'message': 'Client updated successfully', 'client': client.to_client_dict()}), 200


@clients_bp.route('/<int:client_id>', methods=['DELETE'])
@handle_errors
@admin_required()
def delete_client(client_id):
    client = get_client_or_404(client_id)

    db.session.delete(client)
    db.session.commit()

    return jsonify({'message': 'Client deleted successfully'}), 200
