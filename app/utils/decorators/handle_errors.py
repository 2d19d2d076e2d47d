"""
Error handling decorator for endpoints
"""
from functools import wraps

from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from app.utils.exceptions import AppException, Unavailable
from app.utils.timestamps import utcnow


def handle_errors(f):
    """
    Turn exceptions raised by an endpoint into JSON error responses

    - AppException subclasses keep their status code and error kind
    - SQLAlchemy errors roll back the session and are reported as Unavailable
    - anything else is logged with an error id and reported as a 500

    Usage:
        @bp.route('/endpoint')
        @handle_errors
        def my_endpoint():
            raise InvalidArgument('Invalid input')
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            return f(*args, **kwargs)

        except AppException as e:
            current_app.logger.warning(f"{e.error_type} in {f.__name__}: {e.message}")
            return jsonify(e.to_dict()), e.status_code

        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Database error in {f.__name__}: {str(e)}")
            error = Unavailable('Database unavailable')
            return jsonify(error.to_dict()), error.status_code

        except Exception as e:
            error_id = utcnow().strftime('%Y%m%d_%H%M%S_%f')
            current_app.logger.error(
                f"Unexpected error [{error_id}] in {f.__name__}: {str(e)}",
                exc_info=True
            )
            return jsonify({
                'error': 'InternalError',
                'message': 'An unexpected error occurred',
                'error_id': error_id,
                'status_code': 500
            }), 500

    return decorated
