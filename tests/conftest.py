"""
Pytest configuration and fixtures for the appointment booking backend.

This module provides shared fixtures for:
- Flask application with test configuration
- Database setup and teardown
- Model factories for creating test data
"""
import pytest
from datetime import datetime, timedelta

from app import create_app
from extensions import db as _db
from app.models import Appointment, BlockedDate, RecurringPattern, User, UserRole
from app.utils.timestamps import utcnow


@pytest.fixture(scope='session')
def app():
    """
    Create application for the tests.

    Uses TestingConfig with an in-memory SQLite database.
    """
    return create_app('testing')


@pytest.fixture(scope='function')
def db(app):
    """
    Create database for the tests.

    Creates all tables before each test function and drops them after.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app, db):
    """Test client sharing the test's app context (and so its session)"""
    with app.test_client() as client:
        yield client


# =============================================================================
# Model Factories
# =============================================================================

@pytest.fixture
def user_factory(db):
    """
    Factory for creating User instances.

    Usage:
        user = user_factory(name="Jane Doe")
        admin = user_factory(role=UserRole.ADMIN)
    """
    counter = [0]

    def _create_user(**kwargs):
        counter[0] += 1
        defaults = {
            'email': f'user{counter[0]}@example.com',
            'password': 'password123',
            'name': f'Test User {counter[0]}',
            'phonenumber': '0851234567',
            'role': UserRole.USER,
        }
        defaults.update(kwargs)
        user = User(**defaults)
        db.session.add(user)
        db.session.commit()
        return user

    return _create_user


@pytest.fixture
def blocked_date_factory(db):
    """
    Insert BlockedDate rows straight into the table, skipping the store's
    duplicate check. Used to set up duplicates.
    """
    def _create_blocked_date(date, reason='Holiday', **kwargs):
        defaults = {
            'date': date,
            'reason': reason,
            'recurring_pattern': RecurringPattern.NONE,
            'created_at': utcnow(),
            'updated_at': utcnow(),
        }
        defaults.update(kwargs)
        blocked = BlockedDate(**defaults)
        db.session.add(blocked)
        db.session.commit()
        return blocked

    return _create_blocked_date


@pytest.fixture
def appointment_factory(db, user_factory):
    def _create_appointment(user=None, **kwargs):
        if user is None:
            user = user_factory()

        defaults = {
            'user_id': user.id,
            'title': 'Consultation',
            'description': 'First visit',
            'date': datetime(2025, 10, 20, 10, 30),
            'location': 'Main Street Clinic',
            'attendees': [{'name': user.name, 'email': user.email, 'rsvp': 'yes'}],
        }
        defaults.update(kwargs)
        appointment = Appointment(**defaults)
        db.session.add(appointment)
        db.session.commit()
        return appointment

    return _create_appointment


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def admin_user(user_factory):
    return user_factory(email='admin@example.com', name='Admin', role=UserRole.ADMIN)


@pytest.fixture
def regular_user(user_factory):
    return user_factory(email='jane@example.com', name='Jane Doe')


@pytest.fixture
def admin_headers(admin_user):
    return {'X-User-Id': str(admin_user.id)}


@pytest.fixture
def user_headers(regular_user):
    return {'X-User-Id': str(regular_user.id)}


@pytest.fixture
def store(db):
    from app.services.blocked_date_store import BlockedDateStore
    return BlockedDateStore(db.session)


@pytest.fixture
def timestamp_at():
    """created_at timestamps in a known order"""
    base = datetime(2025, 1, 1, 9, 0)
    return lambda minutes: base + timedelta(minutes=minutes)
