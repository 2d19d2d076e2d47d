from app.services.consistency_service import ConsistencyService


def test_clean_registry_is_valid(store):
    store.insert_one('2025-10-24', 'Holiday')
    store.insert_one('2025-10-25', 'Holiday')

    report = ConsistencyService(store).validate()

    assert report.is_valid is True
    assert report.duplicate_dates == []
    assert report.total_count == 2


def test_validate_reports_each_duplicate_date_once(store, blocked_date_factory):
    for date in ['2025-10-24', '2025-10-24', '2025-10-24', '2025-10-25', '2025-10-23', '2025-10-23']:
        blocked_date_factory(date)

    report = ConsistencyService(store).validate()

    assert report.is_valid is False
    assert report.duplicate_dates == ['2025-10-23', '2025-10-24']
    assert report.total_count == 6


def test_validate_is_read_only(store, blocked_date_factory):
    blocked_date_factory('2025-10-24')
    blocked_date_factory('2025-10-24')

    ConsistencyService(store).validate()

    assert store.count() == 2


def test_reconcile_repairs_race_duplicates(store, blocked_date_factory):
    # Two requests both passed the pre-insert check
    blocked_date_factory('2025-10-24', 'Holiday')
    blocked_date_factory('2025-10-24', 'Holiday')
    blocked_date_factory('2025-10-25', 'Training')
    engine = ConsistencyService(store)
    assert engine.validate().is_valid is False

    result = engine.reconcile()

    assert result.original_count == 3
    assert result.unique_count == 2
    assert result.removed_count == 1
    report = engine.validate()
    assert report.is_valid is True
    assert report.total_count == 2
    assert sorted(bd.date for bd in store.find_all()) == ['2025-10-24', '2025-10-25']


def test_reconcile_keeps_oldest_record(store, blocked_date_factory, timestamp_at):
    newer = blocked_date_factory('2025-10-24', 'Second', created_at=timestamp_at(30))
    older = blocked_date_factory('2025-10-24', 'First', created_at=timestamp_at(0))
    older_id = older.id
    newer_id = newer.id

    ConsistencyService(store).reconcile()

    survivor = store.find_by_date('2025-10-24')
    assert survivor.id == older_id
    assert survivor.reason == 'First'
    assert store.find_by_id(newer_id) is None


def test_reconcile_breaks_created_at_ties_by_id(store, blocked_date_factory, timestamp_at):
    first = blocked_date_factory('2025-10-24', 'First', created_at=timestamp_at(0))
    blocked_date_factory('2025-10-24', 'Second', created_at=timestamp_at(0))
    first_id = first.id

    ConsistencyService(store).reconcile()

    assert store.find_by_date('2025-10-24').id == first_id


def test_reconcile_without_duplicates_changes_nothing(store):
    kept = store.insert_one('2025-10-24', 'Holiday')
    kept_id = kept.id

    result = ConsistencyService(store).reconcile()

    assert (result.original_count, result.unique_count, result.removed_count) == (1, 1, 0)
    assert store.find_by_date('2025-10-24').id == kept_id


def test_summary(store, blocked_date_factory):
    blocked_date_factory('2025-10-25', 'Training')
    blocked_date_factory('2025-10-24', 'Holiday')

    summary = ConsistencyService(store).summary()

    assert summary['totalBlockedDates'] == 2
    assert summary['blockedDates'] == [
        {'date': '2025-10-24', 'reason': 'Holiday'},
        {'date': '2025-10-25', 'reason': 'Training'},
    ]
    assert summary['syncStatus'] == 'current'
