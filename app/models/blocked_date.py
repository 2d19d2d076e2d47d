"""
Blocked Date Model
"""

from extensions import db
from app.utils.timestamps import utcnow
from enum import Enum


class RecurringPattern(str, Enum):
    """Intended recurrence of a block; never expanded into extra rows"""
    NONE = 'none'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    YEARLY = 'yearly'


class BlockedDate(db.Model):
    """Calendar day on which new appointments cannot be booked"""
    __tablename__ = 'blocked_dates'

    id = db.Column(db.Integer, primary_key=True)
    # YYYY-MM-DD. Indexed but not unique: duplicates are repaired by
    # ConsistencyService rather than rejected by the table.
    date = db.Column(db.String(10), nullable=False, index=True)
    reason = db.Column(db.String(255), nullable=False)
    recurring_pattern = db.Column(db.Enum(RecurringPattern), default=RecurringPattern.NONE, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date,
            'reason': self.reason,
            'recurringPattern': self.recurring_pattern.value if self.recurring_pattern else RecurringPattern.NONE.value,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<BlockedDate {self.id} - {self.date}>'
