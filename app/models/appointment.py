"""
Appointment Model
"""

from extensions import db
from app.utils.timestamps import utcnow

RSVP_CHOICES = ('yes', 'no', 'maybe')


class Appointment(db.Model):
    """Appointment booked by a user, or by an admin for a walk-in"""

    __tablename__ = 'appointments'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), nullable=True)

    # Appointment Details
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    date = db.Column(db.DateTime, nullable=False, index=True)
    location = db.Column(db.String(255), nullable=False)
    attendees = db.Column(db.JSON, nullable=False, default=list)

    # Status
    cancelled = db.Column(db.Boolean, default=False, nullable=False)
    cancellation_reason = db.Column(db.Text)

    # Timestamps
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
    cancelled_at = db.Column(db.DateTime)

    def __init__(self, **kwargs):
        """Initialize appointment"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    @property
    def calendar_date(self):
        """YYYY-MM-DD of the appointment, comparable with blocked dates"""
        return self.date.strftime('%Y-%m-%d')

    @property
    def primary_attendee(self):
        return self.attendees[0] if self.attendees else None

    def cancel(self, reason=None):
        """Cancel appointment"""
        self.cancelled = True
        self.cancelled_at = utcnow()
        if reason:
            self.cancellation_reason = reason
        db.session.commit()

    def can_cancel(self):
        return not self.cancelled

    def to_dict(self, include_user=False):
        """Convert appointment to dictionary"""
        data = {
            'id': self.id,
            'userId': self.user_id,
            'title': self.title,
            'description': self.description,
            'date': self.date.isoformat() if self.date else None,
            'location': self.location,
            'attendees': self.attendees or [],
            'cancelled': self.cancelled,
            'cancellationReason': self.cancellation_reason,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

        if include_user:
            data.update(self.user_details())

        return data

    def user_details(self):
        """Name, email and phone of whoever booked, falling back to the attendee"""
        attendee = self.primary_attendee or {}
        user = self.user

        phone = attendee.get('phone') or (user.phonenumber if user else None) or 'N/A'

        return {
            'userName': user.name if user else attendee.get('name', 'N/A'),
            'userEmail': user.email if user else attendee.get('email', 'N/A'),
            'userPhone': phone,
            'userNotes': (user.notes or '') if user else '',
            'userDateJoined': user.date_joined.isoformat() if user and user.date_joined else None,
        }

    def __repr__(self):
        return f'<Appointment {self.id} - {self.title}>'
