"""
Appointments Blueprint
"""

from app.api.appointments.routes import appointments_bp

__all__ = ['appointments_bp']
