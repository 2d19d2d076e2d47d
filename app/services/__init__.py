"""
Services Package
Business logic and external service integrations
"""

from app.services.email_service import EmailService
from app.services.blocked_date_store import BlockedDateStore
from app.services.consistency_service import ConsistencyService
from app.services.bulk_block_service import BulkBlockService

__all__ = [
    'EmailService',
    'BlockedDateStore',
    'ConsistencyService',
    'BulkBlockService',
]
