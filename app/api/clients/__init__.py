"""
Clients Blueprint
"""

from app.api.clients.routes import clients_bp

__all__ = ['clients_bp']
