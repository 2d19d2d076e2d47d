"""
Blocked dates consistency checks and repair
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import List

from flask import current_app

from app.utils.timestamps import utcnow


@dataclass
class ConsistencyReport:
    is_valid: bool
    total_count: int
    duplicate_dates: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            'isValid': self.is_valid,
            'totalCount': self.total_count,
            'duplicateDates': self.duplicate_dates,
            'issues': [f'Found {len(self.duplicate_dates)} duplicate dates'] if self.duplicate_dates else [],
            'timestamp': utcnow().isoformat(),
        }


@dataclass
class ReconcileResult:
    original_count: int
    unique_count: int
    removed_count: int

    def to_dict(self):
        return {
            'message': 'Blocked dates sync completed successfully',
            'originalCount': self.original_count,
            'uniqueCount': self.unique_count,
            'removedCount': self.removed_count,
            'timestamp': utcnow().isoformat(),
        }


class ConsistencyService:
    """Detects and removes records that share a date"""

    def __init__(self, store):
        self.store = store

    def validate(self):
        """Report every date held by more than one record. Read-only."""
        records = self.store.find_all()
        counts = Counter(record.date for record in records)
        duplicates = sorted(date for date, seen in counts.items() if seen > 1)

        return ConsistencyReport(
            is_valid=not duplicates,
            total_count=len(records),
            duplicate_dates=duplicates,
        )

    def reconcile(self):
        """
        Keep one record per date and delete the rest.

        The survivor is the oldest record (earliest created_at, then lowest
        id). Only the extra copies are deleted, all in one transaction, so a
        failure leaves the table as it was and no date is ever lost.
        """
        records = self.store.find_all()
        survivors = {}
        extras = []

        for record in records:
            if record.date in survivors:
                extras.append(record)
            else:
                survivors[record.date] = record

        if extras:
            current_app.logger.warning(
                f'Reconciling blocked dates: removing {len(extras)} duplicate records '
                f'across {len({r.date for r in extras})} dates'
            )
            self.store.delete_records(extras)

        return ReconcileResult(
            original_count=len(records),
            unique_count=len(survivors),
            removed_count=len(extras),
        )

    def summary(self):
        """Snapshot of the registry for frontend sync"""
        records = sorted(self.store.find_all(), key=lambda r: (r.date, r.id))
        report = self.validate()

        return {
            'totalBlockedDates': len(records),
            'blockedDates': [{'date': r.date, 'reason': r.reason} for r in records],
            'lastUpdated': utcnow().isoformat(),
            'syncStatus': 'current' if report.is_valid else 'duplicates',
        }
