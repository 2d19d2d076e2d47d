"""
Input validators shared by the services and blueprints
"""

import re
from datetime import date, datetime, timezone

from flask import request

from app.utils.exceptions import InvalidArgument

DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')
EMAIL_PATTERN = re.compile(r'[^@\s]+@[^@\s]+\.[^@\s]+')
IRISH_MOBILE_PATTERN = re.compile(r'08[3-9][0-9]{7}')


def validate_date(candidate):
    """
    Check a calendar date string against the canonical YYYY-MM-DD form.

    Only the lexical shape is checked: '2025-02-31' passes. Digits must be
    ASCII 0-9. Fixed width is what lets blocked dates be range-filtered as
    plain strings.
    """
    if not isinstance(candidate, str):
        return False
    return DATE_PATTERN.fullmatch(candidate) is not None


def require_date(candidate, field='date'):
    """Return ``candidate`` unchanged or raise InvalidArgument"""
    if not validate_date(candidate):
        raise InvalidArgument(
            f'Invalid {field} format. Use YYYY-MM-DD',
            details={'field': field, 'value': candidate}
        )
    return candidate


def require_text(value, field):
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f'{field} is required', details={'field': field})
    return value.strip()


def validate_email(value):
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def validate_phonenumber(value):
    """Irish mobile numbers: 08, then 3-9, then seven digits"""
    return isinstance(value, str) and IRISH_MOBILE_PATTERN.fullmatch(value) is not None


def parse_dob(value):
    """Parse an optional date of birth; it may not lie in the future"""
    if value in (None, ''):
        return None
    try:
        dob = datetime.strptime(value, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise InvalidArgument('Invalid date of birth. Use YYYY-MM-DD', details={'field': 'dob'})
    if dob > date.today():
        raise InvalidArgument('Date of birth cannot be in the future', details={'field': 'dob'})
    return dob


def parse_datetime(value, field='date'):
    """Parse an ISO-8601 date or datetime string into a naive datetime"""
    if not isinstance(value, str) or not value:
        raise InvalidArgument(f'{field} is required', details={'field': field})
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise InvalidArgument(f'Invalid {field}. Use an ISO-8601 date', details={'field': field})
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def json_body():
    """The request's JSON object; a missing or unparsable body reads as {}"""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidArgument('Request body must be a JSON object')
    return data
