"""
Block several dates in one call
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import List

from flask import current_app

from app.services.blocked_date_store import parse_pattern
from app.utils.exceptions import InvalidArgument
from app.utils.validators import require_text, validate_date

DEFAULT_REASON = 'Day blocked off'


@dataclass
class BulkBlockResult:
    inserted: List[str] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)

    @property
    def inserted_count(self):
        return len(self.inserted)

    def to_dict(self):
        return {
            'message': f'Successfully blocked {self.inserted_count} dates',
            'insertedCount': self.inserted_count,
            'inserted': self.inserted,
            'rejected': self.rejected,
        }


class BulkBlockService:

    def __init__(self, store):
        self.store = store

    def block_many(self, dates, reason=DEFAULT_REASON, recurring_pattern=None):
        """
        Validate every date up front, then insert them independently.

        Any malformed date fails the whole call before anything is written.
        Past that point a date that is already blocked (or repeated in the
        input) is skipped and reported in ``rejected``.
        """
        if not isinstance(dates, list) or not dates:
            raise InvalidArgument('dates must be a non-empty list')

        invalid = [d for d in dates if not validate_date(d)]
        if invalid:
            raise InvalidArgument(
                'Invalid date format. Use YYYY-MM-DD',
                details={'invalidDates': invalid}
            )

        reason = require_text(reason, 'reason')
        pattern = parse_pattern(recurring_pattern)

        records = [
            {'date': date, 'reason': reason, 'recurring_pattern': pattern}
            for date in dates
        ]
        inserted = self.store.insert_many_detailed(records)

        remaining = Counter(inserted)
        rejected = []
        for date in dates:
            if remaining[date]:
                remaining[date] -= 1
            else:
                rejected.append(date)

        current_app.logger.info(f'Bulk block: {len(inserted)} inserted, {len(rejected)} skipped')
        return BulkBlockResult(inserted=inserted, rejected=rejected)
