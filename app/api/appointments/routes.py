"""
Appointments Blueprint
"""

from flask import Blueprint, jsonify, g, current_app
from extensions import db
from app.models.appointment import Appointment, RSVP_CHOICES
from app.models.user import User
from app.services.blocked_date_store import BlockedDateStore
from app.services.email_service import EmailService
from app.utils.decorators import admin_required, handle_errors, optional_user, user_required
from app.utils.decorators.admin_required import ensure_self_or_admin
from app.utils.exceptions import Conflict, InvalidArgument, NotFound
from app.utils.validators import json_body, parse_datetime, require_text, validate_email

appointments_bp = Blueprint('appointments', __name__)


def get_appointment_or_404(appointment_id):
    appointment = db.session.get(Appointment, appointment_id)
    if not appointment:
        raise NotFound(f'Appointment with id {appointment_id} not found')
    return appointment


def ensure_date_open(when):
    """Appointments cannot be booked on a blocked date"""
    day = when.strftime('%Y-%m-%d')
    blocked = BlockedDateStore(db.session).find_by_date(day)
    if blocked:
        raise Conflict(
            f'{day} is not available for appointments',
            details={'date': day, 'reason': blocked.reason}
        )


def clean_attendees(attendees):
    if attendees is None:
        return []
    if not isinstance(attendees, list):
        raise InvalidArgument('attendees must be a list')

    cleaned = []
    for index, attendee in enumerate(attendees):
        if not isinstance(attendee, dict):
            raise InvalidArgument(f'attendees[{index}] must be an object')
        name = require_text(attendee.get('name'), f'attendees[{index}].name')
        email = attendee.get('email')
        if not validate_email(email):
            raise InvalidArgument(f'attendees[{index}].email is not a valid email address')
        rsvp = attendee.get('rsvp', 'maybe')
        if rsvp not in RSVP_CHOICES:
            raise InvalidArgument(f'attendees[{index}].rsvp must be one of: {", ".join(RSVP_CHOICES)}')

        entry = {'name': name, 'email': email, 'rsvp': rsvp}
        if attendee.get('phone'):
            entry['phone'] = attendee['phone']
        cleaned.append(entry)
    return cleaned


def resolve_owner(user_id, attendees):
    """
    Work out who the appointment belongs to: an explicit user id, then the
    logged in user, then a registered user matching the first attendee email.
    """
    if user_id:
        try:
            user = db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            user = None
        if not user:
            raise InvalidArgument('User not found', details={'userId': user_id})
        return user

    if g.current_user:
        return g.current_user

    if not attendees:
        raise InvalidArgument('User ID is required')

    user = User.find_by_email(attendees[0]['email'])
    if not user:
        raise InvalidArgument('User not found. Please ensure you are logged in.')
    return user


@appointments_bp.route('/', methods=['GET'])
@handle_errors
@admin_required()
def get_all_appointments():
    """Get all appointments"""
    appointments = Appointment.query.order_by(Appointment.date).all()
    return jsonify([a.to_dict() for a in appointments]), 200


@appointments_bp.route('/with-user-details', methods=['GET'])
@handle_errors
@admin_required()
def get_appointments_with_user_details():
    appointments = Appointment.query.order_by(Appointment.date).all()
    return jsonify([a.to_dict(include_user=True) for a in appointments]), 200


@appointments_bp.route('/user/<int:user_id>', methods=['GET'])
@handle_errors
@user_required()
def get_appointments_by_user(user_id):
    """Get a user's appointments"""
    ensure_self_or_admin(user_id)
    appointments = (
        Appointment.query
        .filter_by(user_id=user_id)
        .order_by(Appointment.date)
        .all()
    )
    return jsonify([a.to_dict() for a in appointments]), 200


@appointments_bp.route('/<int:appointment_id>', methods=['GET'])
@handle_errors
@user_required()
def get_appointment(appointment_id):
    """Get appointment details"""
    appointment = get_appointment_or_404(appointment_id)
    ensure_self_or_admin(appointment.user_id)
    return jsonify(appointment.to_dict(include_user=True)), 200


@appointments_bp.route('/', methods=['POST'])
@handle_errors
@optional_user()
def create_appointment():
    """Book a new appointment"""
    data = json_body()

    title = require_text(data.get('title'), 'title')
    location = require_text(data.get('location'), 'location')
    when = parse_datetime(data.get('date'))
    attendees = clean_attendees(data.get('attendees'))

    owner = resolve_owner(data.get('userId'), attendees)
    ensure_date_open(when)

    appointment = Appointment(
        user_id=owner.id,
        title=title,
        description=data.get('description'),
        date=when,
        location=location,
        attendees=attendees,
    )

    db.session.add(appointment)
    db.session.commit()
    current_app.logger.info(f'Appointment {appointment.id} booked for user {owner.id} on {appointment.calendar_date}')

    EmailService.send_appointment_confirmation(owner, appointment)

    return jsonify({
        'message': 'Appointment created successfully',
        'id': appointment.id,
        'appointment': appointment.to_dict()
    }), 201


@appointments_bp.route('/<int:appointment_id>', methods=['PUT'])
@handle_errors
@user_required()
def update_appointment(appointment_id):
    """Update or reschedule an appointment"""
    appointment = get_appointment_or_404(appointment_id)
    ensure_self_or_admin(appointment.user_id)

    if appointment.cancelled:
        raise Conflict('Cancelled appointments cannot be changed')

    data = json_body()
    previous_date = appointment.date
    changed = False

    if data.get('title'):
        appointment.title = require_text(data['title'], 'title')
        changed = True
    if 'description' in data:
        appointment.description = data['description']
        changed = True
    if data.get('location'):
        appointment.location = require_text(data['location'], 'location')
        changed = True
    if 'attendees' in data:
        appointment.attendees = clean_attendees(data['attendees'])
        changed = True
    if data.get('userId'):
        if not g.current_user.is_admin:
            raise InvalidArgument('Only admins can reassign appointments')
        appointment.user_id = resolve_owner(data['userId'], []).id
        changed = True
    if data.get('date'):
        when = parse_datetime(data['date'])
        if when != previous_date:
            ensure_date_open(when)
            appointment.date = when
            changed = True

    if not changed:
        raise InvalidArgument('No changes made to appointment')

    db.session.commit()

    rescheduled = appointment.date != previous_date
    if rescheduled and appointment.user:
        EmailService.send_appointment_rescheduled_email(appointment.user, appointment, previous_date)

    return jsonify({
        'message': 'Appointment rescheduled successfully' if rescheduled else 'Appointment updated successfully',
        'appointment': appointment.to_dict()
    }), 200


@appointments_bp.route('/<int:appointment_id>/cancel', methods=['POST'])
@handle_errors
@user_required()
def cancel_appointment(appointment_id):
    """Cancel an appointment"""
    appointment = get_appointment_or_404(appointment_id)
    ensure_self_or_admin(appointment.user_id)

    if not appointment.can_cancel():
        raise Conflict('Appointment is already cancelled')

    data = json_body()
    appointment.cancel(reason=data.get('reason'))

    if appointment.user:
        EmailService.send_appointment_cancelled_email(appointment.user, appointment)

    return jsonify({
        'message': 'Appointment cancelled successfully',
        'appointment': appointment.to_dict()
    }), 200


@appointments_bp.route('/<int:appointment_id>', methods=['DELETE'])
@handle_errors
@user_required()
def delete_appointment(appointment_id):
    appointment = get_appointment_or_404(appointment_id)
    ensure_self_or_admin(appointment.user_id)

    db.session.delete(appointment)
    db.session.commit()

    return jsonify({'message': f'Appointment with id {appointment_id} deleted successfully'}), 200
