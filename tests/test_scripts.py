import pytest

from app.models import UserRole
from scripts.blocked_dates_admin import main, run
from scripts.make_admin import make_admin


class TestBlockedDatesAdmin:

    def test_block_multiple_then_summary(self, app, store):
        result = run('block-multiple', ['2025-12-24, 2025-12-25', 'Christmas'], app=app)

        assert result['insertedCount'] == 2
        summary = run('summary', [], app=app)
        assert summary['blockedDates'] == [
            {'date': '2025-12-24', 'reason': 'Christmas'},
            {'date': '2025-12-25', 'reason': 'Christmas'},
        ]

    def test_validate_and_force_sync(self, app, store, blocked_date_factory):
        blocked_date_factory('2025-10-24')
        blocked_date_factory('2025-10-24')

        assert run('validate', [], app=app)['duplicateDates'] == ['2025-10-24']
        assert run('force-sync', [], app=app)['removedCount'] == 1
        assert store.count() == 1

    def test_clear_all(self, app, store, blocked_date_factory):
        blocked_date_factory('2025-10-24')
        blocked_date_factory('2025-10-25')

        assert run('clear-all', [], app=app) == {'deletedCount': 2}
        assert store.count() == 0

    def test_block_multiple_needs_dates(self, app, db):
        with pytest.raises(SystemExit):
            run('block-multiple', [], app=app)

    def test_unknown_command_prints_usage(self, capsys):
        assert main(['explode']) == 1
        assert 'Usage' in capsys.readouterr().out


class TestMakeAdmin:

    def test_promotes_user(self, app, regular_user, capsys):
        assert make_admin('JANE@example.com', app=app) is True
        assert regular_user.role == UserRole.ADMIN

    def test_unknown_email(self, app, regular_user, capsys):
        assert make_admin('nobody@example.com', app=app) is False
        assert 'jane@example.com' in capsys.readouterr().out
