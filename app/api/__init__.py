"""
API Package
"""

# Import all blueprints for easy access
from app.api.auth import auth_bp
from app.api.appointments import appointments_bp
from app.api.blocked_dates import blocked_dates_bp
from app.api.admin import admin_bp
from app.api.clients import clients_bp
from app.api.email import email_bp

__all__ = [
    'auth_bp',
    'appointments_bp',
    'blocked_dates_bp',
    'admin_bp',
    'clients_bp',
    'email_bp',
]
