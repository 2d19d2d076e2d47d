"""
Email Blueprint
"""

from app.api.email.routes import email_bp

__all__ = ['email_bp']
