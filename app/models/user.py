"""
User Model
"""

from extensions import db, bcrypt
from app.utils.timestamps import utcnow
from enum import Enum


class UserRole(str, Enum):
    """User roles enum"""
    USER = 'user'
    ADMIN = 'admin'


class User(db.Model):
    """Registered user; admins manage the ones with the user role as clients"""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    phonenumber = db.Column(db.String(20))
    dob = db.Column(db.Date)
    notes = db.Column(db.Text)

    role = db.Column(db.Enum(UserRole), default=UserRole.USER, nullable=False)

    # Timestamps
    date_joined = db.Column(db.DateTime, default=utcnow, nullable=False)
    last_updated = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    appointments = db.relationship('Appointment', backref='user', lazy='dynamic')

    def __init__(self, email, password, name, **kwargs):
        """Initialize user with hashed password"""
        self.email = email.strip().lower()
        self.name = name
        self.set_password(password)

        # Handle optional fields
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Verify password against hash"""
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    @classmethod
    def find_by_email(cls, email):
        """Case-insensitive email lookup"""
        if not email:
            return None
        return cls.query.filter(db.func.lower(cls.email) == email.strip().lower()).first()

    def to_dict(self):
        """Convert user to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phonenumber': self.phonenumber,
            'dob': self.dob.isoformat() if self.dob else None,
            'role': self.role.value,
            'dateJoined': self.date_joined.isoformat() if self.date_joined else None,
            'lastUpdated': self.last_updated.isoformat() if self.last_updated else None,
        }

    def to_client_dict(self):
        """Client view used by the admin clients screen"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phonenumber,
            'notes': self.notes or '',
            'dateJoined': self.date_joined.isoformat() if self.date_joined else None,
            'appointmentCount': self.appointments.count(),
        }

    def __repr__(self):
        return f'<User {self.email}>'
