import pytest

from app.models import RecurringPattern
from app.services.bulk_block_service import BulkBlockService, DEFAULT_REASON
from app.utils.exceptions import InvalidArgument


def test_existing_date_does_not_stop_the_batch(store):
    store.insert_one('2025-10-25', 'Already blocked')

    result = BulkBlockService(store).block_many(
        ['2025-10-24', '2025-10-25', '2025-10-26'], 'Closed'
    )

    assert result.inserted_count == 2
    assert result.inserted == ['2025-10-24', '2025-10-26']
    assert result.rejected == ['2025-10-25']
    assert store.find_by_date('2025-10-25').reason == 'Already blocked'


def test_records_share_reason_and_pattern(store):
    BulkBlockService(store).block_many(['2025-12-25', '2025-12-26'], 'Christmas', 'yearly')

    for bd in store.find_all():
        assert bd.reason == 'Christmas'
        assert bd.recurring_pattern == RecurringPattern.YEARLY


def test_default_reason(store):
    BulkBlockService(store).block_many(['2025-10-24'])
    assert store.find_by_date('2025-10-24').reason == DEFAULT_REASON


def test_one_malformed_date_fails_whole_call_before_writing(store):
    with pytest.raises(InvalidArgument) as exc:
        BulkBlockService(store).block_many(['2025-10-24', '2025/10/25', '2025-10-26'], 'Closed')

    assert exc.value.details['invalidDates'] == ['2025/10/25']
    assert store.count() == 0


@pytest.mark.parametrize('dates', [[], None, '2025-10-24'])
def test_dates_must_be_non_empty_list(store, dates):
    with pytest.raises(InvalidArgument):
        BulkBlockService(store).block_many(dates, 'Closed')


def test_empty_reason_rejected(store):
    with pytest.raises(InvalidArgument):
        BulkBlockService(store).block_many(['2025-10-24'], '')
    assert store.count() == 0


def test_repeated_input_dates_reported_as_rejected(store):
    result = BulkBlockService(store).block_many(['2025-10-24', '2025-10-24'], 'Closed')

    assert result.inserted_count == 1
    assert result.rejected == ['2025-10-24']
    assert store.count() == 1


def test_second_run_is_idempotent(store):
    service = BulkBlockService(store)
    service.block_many(['2025-10-24', '2025-10-25'], 'Closed')

    result = service.block_many(['2025-10-24', '2025-10-25'], 'Closed')

    assert result.inserted_count == 0
    assert store.count() == 2
