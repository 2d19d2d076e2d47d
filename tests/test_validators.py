import pytest
from datetime import date, datetime, timedelta, timezone

from app.utils.exceptions import InvalidArgument
from app.utils.timestamps import utcnow
from app.utils.validators import (
    parse_datetime,
    parse_dob,
    require_date,
    validate_date,
    validate_email,
    validate_phonenumber,
)


@pytest.mark.parametrize('candidate', [
    '2025-10-24',
    '1999-01-01',
    '2025-02-31',  # shape only, no calendar check
    '0000-00-00',
])
def test_validate_date_accepts_canonical_form(candidate):
    assert validate_date(candidate) is True


@pytest.mark.parametrize('candidate', [
    '',
    '2025/10/24',
    '2025-1-24',
    '25-10-24',
    '2025-10-240',
    '20251024',
    ' 2025-10-24',
    '2025-10-24\n',
    '2025-10-24T00:00:00',
    'abcd-ef-gh',
    '٢٠٢٥-١٠-٢٤',  # Arabic-Indic digits
    '２０２５-１０-２４',  # fullwidth digits
    None,
    20251024,
])
def test_validate_date_rejects_everything_else(candidate):
    assert validate_date(candidate) is False


def test_require_date_raises_invalid_argument():
    with pytest.raises(InvalidArgument) as exc:
        require_date('24-10-2025', 'start')
    assert exc.value.status_code == 400
    assert exc.value.details['field'] == 'start'


def test_require_date_returns_value():
    assert require_date('2025-10-24') == '2025-10-24'


def test_validate_email():
    assert validate_email('jane@example.com')
    assert not validate_email('jane@')
    assert not validate_email('')
    assert not validate_email(None)


def test_validate_phonenumber_irish_mobile():
    assert validate_phonenumber('0851234567')
    assert not validate_phonenumber('0821234567')
    assert not validate_phonenumber('085123456')
    assert not validate_phonenumber('+353851234567')
    assert not validate_phonenumber('085١٢٣٤٥٦٧')


def test_parse_dob_rejects_future_dates():
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    with pytest.raises(InvalidArgument):
        parse_dob(tomorrow)
    assert parse_dob('1990-05-17') == date(1990, 5, 17)
    assert parse_dob(None) is None


def test_parse_datetime_normalises_utc_offsets():
    parsed = parse_datetime('2025-10-24T09:00:00Z')
    assert parsed.tzinfo is None
    assert (parsed.hour, parsed.minute) == (9, 0)

    with pytest.raises(InvalidArgument):
        parse_datetime('next tuesday')


def test_utcnow_is_naive_utc():
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    now = utcnow()

    assert now.tzinfo is None
    assert before <= now <= before + timedelta(seconds=5)
