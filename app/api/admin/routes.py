"""
Admin Routes
"""

from flask import Blueprint, jsonify, request, g
from app.models.user import User
from app.models.appointment import Appointment
from app.models.blocked_date import BlockedDate
from app.services.email_service import EmailService
from extensions import db
from app.utils.decorators import admin_required, handle_errors
from app.utils.exceptions import InvalidArgument, NotFound

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/stats', methods=['GET'])
@handle_errors
@admin_required()
def admin_stats():
    """Get system statistics"""
    return jsonify({
        'totalUsers': User.query.count(),
        'totalAppointments': Appointment.query.count(),
        'cancelledAppointments': Appointment.query.filter_by(cancelled=True).count(),
        'totalBlockedDates': BlockedDate.query.count(),
        'adminAccess': True
    }), 200


@admin_bp.route('/users', methods=['GET'])
@handle_errors
@admin_required()
def get_all_users():
    """Get all users (admin only)"""
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', 20, type=int)

    users = User.query.order_by(User.id).paginate(page=page, per_page=per_page, error_out=False)

    return jsonify({
        'users': [user.to_dict() for user in users.items],
        'total': users.total,
        'pages': users.pages,
        'current_page': page
    }), 200


@admin_bp.route('/appointments', methods=['GET'])
@handle_errors
@admin_required()
def get_appointments_with_users():
    """All appointments enriched with the booking user's details"""
    appointments = Appointment.query.order_by(Appointment.date).all()
    return jsonify([a.to_dict(include_user=True) for a in appointments]), 200


@admin_bp.route('/users/<int:user_id>', methods=['DELETE'])
@handle_errors
@admin_required()
def delete_user(user_id):
    """Delete a user account"""
    if user_id == g.current_user.id:
        raise InvalidArgument('You cannot delete your own account')

    user = db.session.get(User, user_id)
    if not user:
        raise NotFound('User not found')

    EmailService.send_account_deletion_email(user)

    db.session.delete(user)
    db.session.commit()

    return jsonify({'message': 'User deleted successfully'}), 200
