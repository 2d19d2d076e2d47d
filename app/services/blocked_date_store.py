"""
Blocked Date Store
Persistence operations over the blocked_dates table
"""

import calendar

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.models.blocked_date import BlockedDate, RecurringPattern
from app.utils.exceptions import Conflict, InvalidArgument, NotFound, Unavailable
from app.utils.timestamps import utcnow
from app.utils.validators import require_date, require_text, validate_date


def parse_pattern(value):
    """Map 'none'/'weekly'/'monthly'/'yearly' (or None) to RecurringPattern"""
    if value is None or value == '':
        return RecurringPattern.NONE
    if isinstance(value, RecurringPattern):
        return value
    try:
        return RecurringPattern(str(value).lower())
    except ValueError:
        allowed = ', '.join(p.value for p in RecurringPattern)
        raise InvalidArgument(
            f'Invalid recurring pattern. Use one of: {allowed}',
            details={'field': 'recurringPattern', 'value': value}
        )


class BlockedDateStore:
    """
    Blocked-date persistence bound to a SQLAlchemy session.

    Uniqueness of ``date`` is checked before insert and update but is not
    enforced by the table, so two concurrent requests can still both pass the
    check. ConsistencyService finds and removes the resulting duplicates.
    """

    def __init__(self, session):
        self.session = session

    @property
    def query(self):
        return self.session.query(BlockedDate)

    # Reads

    def find_all(self):
        """Every record, oldest first"""
        return self.query.order_by(BlockedDate.created_at, BlockedDate.id).all()

    def count(self):
        return self.query.count()

    def find_by_id(self, blocked_date_id):
        return self.session.get(BlockedDate, blocked_date_id)

    def find_by_date(self, date):
        return self.query.filter(BlockedDate.date == date).order_by(BlockedDate.id).first()

    def find_in_range(self, start, end):
        """
        Records with start <= date <= end, both bounds inclusive.

        Compared as strings: for zero-padded YYYY-MM-DD values lexical order
        is chronological order.
        """
        require_date(start, 'start')
        require_date(end, 'end')
        return (
            self.query
            .filter(BlockedDate.date >= start, BlockedDate.date <= end)
            .order_by(BlockedDate.date, BlockedDate.id)
            .all()
        )

    def find_in_month(self, year, month):
        try:
            year, month = int(year), int(month)
        except (TypeError, ValueError):
            raise InvalidArgument('Invalid year or month')
        if not 1 <= month <= 12 or not 1 <= year <= 9999:
            raise InvalidArgument('Invalid year or month')

        last_day = calendar.monthrange(year, month)[1]
        return self.find_in_range(f'{year:04d}-{month:02d}-01', f'{year:04d}-{month:02d}-{last_day:02d}')

    # Writes

    def insert_one(self, date, reason, recurring_pattern=None):
        """Insert a single blocked date; Conflict if the date is already blocked"""
        require_date(date)
        reason = require_text(reason, 'reason')
        pattern = parse_pattern(recurring_pattern)

        if self.find_by_date(date) is not None:
            raise Conflict('Date is already blocked', details={'date': date})

        blocked = self._build(date, reason, pattern)
        self.session.add(blocked)
        self._commit()

        current_app.logger.info(f'Blocked date {date} created (id={blocked.id})')
        return blocked

    def insert_many(self, records):
        """Insert records independently; returns how many were persisted"""
        return len(self.insert_many_detailed(records))

    def insert_many_detailed(self, records):
        """
        Insert each record on its own commit and return the dates persisted.

        A record is skipped, without affecting the others, when its date is
        malformed, already blocked or repeated earlier in the batch, when its
        reason is blank or its pattern unknown, or when the database rejects
        it. Losing the connection still raises Unavailable.
        """
        inserted = []
        seen = set()

        for record in records:
            date = record.get('date')
            if not validate_date(date) or date in seen:
                current_app.logger.info(f'Skipping blocked date {date!r}: invalid or repeated in batch')
                continue
            seen.add(date)

            if self.find_by_date(date) is not None:
                current_app.logger.info(f'Skipping blocked date {date}: already blocked')
                continue

            try:
                reason = require_text(record.get('reason'), 'reason')
                pattern = parse_pattern(record.get('recurring_pattern'))
            except InvalidArgument as e:
                current_app.logger.info(f'Skipping blocked date {date}: {e.message}')
                continue

            blocked = self._build(date, reason, pattern)
            self.session.add(blocked)
            try:
                self.session.commit()
            except IntegrityError as e:
                self.session.rollback()
                current_app.logger.warning(f'Skipping blocked date {date}: {e.orig}')
                continue
            except SQLAlchemyError as e:
                self.session.rollback()
                raise Unavailable('Failed to save blocked dates', details={'inserted': inserted}) from e

            inserted.append(date)

        return inserted

    def update_one(self, blocked_date_id, patch):
        """
        Apply ``patch`` (date, reason, recurring_pattern) to one record.

        Values are validated exactly as on creation. A new date that another
        record already holds is a Conflict.
        """
        blocked = self.find_by_id(blocked_date_id)
        if blocked is None:
            raise NotFound('Blocked date not found', details={'id': blocked_date_id})

        changes = {}
        if patch.get('date') is not None:
            changes['date'] = require_date(patch['date'])
        if patch.get('reason') is not None:
            changes['reason'] = require_text(patch['reason'], 'reason')
        if patch.get('recurring_pattern') is not None:
            changes['recurring_pattern'] = parse_pattern(patch['recurring_pattern'])

        if not changes:
            raise InvalidArgument('No changes made to blocked date')

        if 'date' in changes:
            clash = (
                self.query
                .filter(BlockedDate.date == changes['date'], BlockedDate.id != blocked.id)
                .first()
            )
            if clash is not None:
                raise Conflict('Date is already blocked by another record', details={'date': changes['date']})

        for field, value in changes.items():
            setattr(blocked, field, value)
        blocked.updated_at = utcnow()
        self._commit()

        return blocked

    def delete_one(self, blocked_date_id):
        blocked = self.find_by_id(blocked_date_id)
        if blocked is None:
            raise NotFound('Blocked date not found', details={'id': blocked_date_id})
        self.session.delete(blocked)
        self._commit()
        return blocked

    def delete_by_date(self, date):
        require_date(date)
        blocked = self.find_by_date(date)
        if blocked is None:
            raise NotFound('Blocked date not found', details={'date': date})
        self.session.delete(blocked)
        self._commit()
        return blocked

    def delete_all(self):
        """Remove every blocked date. Irreversible."""
        removed = self.query.delete(synchronize_session=False)
        self._commit()
        current_app.logger.warning(f'Cleared ALL blocked dates ({removed} removed)')
        return removed

    def delete_records(self, records):
        """Delete the given records in a single transaction"""
        for record in records:
            self.session.delete(record)
        self._commit()
        return len(records)

    # Helpers

    @staticmethod
    def _build(date, reason, pattern):
        now = utcnow()
        return BlockedDate(
            date=date,
            reason=reason,
            recurring_pattern=pattern,
            created_at=now,
            updated_at=now,
        )

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise Unavailable('Database write failed') from e
