"""
Models package initialization
Import all models here for easy access
"""

from app.models.user import User, UserRole
from app.models.appointment import Appointment
from app.models.blocked_date import BlockedDate, RecurringPattern

__all__ = [
    'User',
    'UserRole',
    'Appointment',
    'BlockedDate',
    'RecurringPattern',
]
