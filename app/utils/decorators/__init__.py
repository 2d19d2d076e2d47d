"""
Route decorators
"""

from app.utils.decorators.handle_errors import handle_errors
from app.utils.decorators.admin_required import admin_required, user_required, optional_user

__all__ = ['handle_errors', 'admin_required', 'user_required', 'optional_user']
