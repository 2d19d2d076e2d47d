"""
Blocked Dates Routes
"""

from flask import Blueprint, jsonify, request, current_app, g
from extensions import db
from app.services.blocked_date_store import BlockedDateStore
from app.services.bulk_block_service import BulkBlockService, DEFAULT_REASON
from app.services.consistency_service import ConsistencyService
from app.utils.decorators import admin_required, handle_errors
from app.utils.exceptions import InvalidArgument
from app.utils.validators import json_body, require_date

blocked_dates_bp = Blueprint('blocked_dates', __name__)


def get_store():
    return BlockedDateStore(db.session)


@blocked_dates_bp.route('/', methods=['GET'])
@handle_errors
def get_all_blocked_dates():
    """Get all blocked dates"""
    blocked_dates = get_store().find_all()
    return jsonify([bd.to_dict() for bd in blocked_dates]), 200


@blocked_dates_bp.route('/range', methods=['GET'])
@handle_errors
def get_blocked_dates_in_range():
    """Get blocked dates between ?start and ?end, inclusive"""
    start = request.args.get('start')
    end = request.args.get('end')

    if not start or not end:
        raise InvalidArgument('Start and end dates are required')

    blocked_dates = get_store().find_in_range(start, end)
    return jsonify([bd.to_dict() for bd in blocked_dates]), 200


@blocked_dates_bp.route('/month/<year>/<month>', methods=['GET'])
@handle_errors
def get_blocked_dates_by_month(year, month):
    """Get blocked dates for a specific month"""
    blocked_dates = get_store().find_in_month(year, month)
    return jsonify([bd.to_dict() for bd in blocked_dates]), 200


@blocked_dates_bp.route('/check/<date>', methods=['GET'])
@handle_errors
def check_date_blocked(date):
    """Check if a specific date is blocked"""
    require_date(date)
    blocked = get_store().find_by_date(date)

    if blocked:
        return jsonify({'blocked': True, 'date': blocked.date, 'reason': blocked.reason}), 200
    return jsonify({'blocked': False, 'date': date}), 200


@blocked_dates_bp.route('/summary', methods=['GET'])
@handle_errors
def get_blocked_dates_summary():
    """Blocked dates snapshot for frontend sync"""
    return jsonify(ConsistencyService(get_store()).summary()), 200


@blocked_dates_bp.route('/validate', methods=['GET'])
@handle_errors
def validate_blocked_dates_consistency():
    """Report dates that are blocked more than once"""
    report = ConsistencyService(get_store()).validate()
    return jsonify(report.to_dict()), 200


@blocked_dates_bp.route('/', methods=['POST'])
@handle_errors
@admin_required()
def create_blocked_date():
    """Block a date"""
    data = json_body()

    blocked = get_store().insert_one(
        data.get('date'),
        data.get('reason'),
        data.get('recurringPattern'),
    )

    return jsonify({
        'message': 'Blocked date created successfully',
        'id': blocked.id,
        'data': blocked.to_dict()
    }), 201


@blocked_dates_bp.route('/bulk-block', methods=['POST'])
@handle_errors
@admin_required()
def block_multiple_dates():
    """Block several dates at once; already blocked dates are skipped"""
    data = json_body()

    result = BulkBlockService(get_store()).block_many(
        data.get('dates'),
        data.get('reason', DEFAULT_REASON),
        data.get('recurringPattern'),
    )

    return jsonify(result.to_dict()), 201


@blocked_dates_bp.route('/force-sync', methods=['POST'])
@handle_errors
@admin_required()
def force_sync_blocked_dates():
    """Remove duplicate records so each date is blocked once"""
    result = ConsistencyService(get_store()).reconcile()
    return jsonify(result.to_dict()), 200


@blocked_dates_bp.route('/<int:blocked_date_id>', methods=['PUT'])
@handle_errors
@admin_required()
def update_blocked_date(blocked_date_id):
    """Update a blocked date"""
    data = json_body()

    blocked = get_store().update_one(blocked_date_id, {
        'date': data.get('date'),
        'reason': data.get('reason'),
        'recurring_pattern': data.get('recurringPattern'),
    })

    return jsonify({'message': 'Blocked date updated successfully', 'data': blocked.to_dict()}), 200


@blocked_dates_bp.route('/<int:blocked_date_id>', methods=['DELETE'])
@handle_errors
@admin_required()
def delete_blocked_date(blocked_date_id):
    """Delete blocked date by ID"""
    get_store().delete_one(blocked_date_id)
    return jsonify({'message': 'Blocked date deleted successfully'}), 200


@blocked_dates_bp.route('/date/<date>', methods=['DELETE'])
@handle_errors
@admin_required()
def delete_blocked_date_by_date(date):
    """Unblock a date"""
    get_store().delete_by_date(date)
    return jsonify({'message': 'Blocked date deleted successfully'}), 200


@blocked_dates_bp.route('/clear-all', methods=['DELETE'])
@handle_errors
@admin_required()
def clear_all_blocked_dates():
    """Remove every blocked date"""
    removed = get_store().delete_all()
    current_app.logger.warning(f'Blocked dates cleared by {g.current_user.email}')
    return jsonify({'message': 'All blocked dates cleared', 'deletedCount': removed}), 200
