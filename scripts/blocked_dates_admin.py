"""
Blocked dates maintenance tool

Usage:
    python scripts/blocked_dates_admin.py summary
    python scripts/blocked_dates_admin.py validate
    python scripts/blocked_dates_admin.py force-sync
    python scripts/blocked_dates_admin.py clear-all
    python scripts/blocked_dates_admin.py block-multiple "2025-10-25,2025-10-26" ["Reason"]
"""

import json
import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from extensions import db
from app.services.blocked_date_store import BlockedDateStore
from app.services.bulk_block_service import BulkBlockService, DEFAULT_REASON
from app.services.consistency_service import ConsistencyService
from app.utils.exceptions import AppException

COMMANDS = ('summary', 'validate', 'force-sync', 'clear-all', 'block-multiple')


def run(command, args, app=None):
    """Run one command and return its result as a dict"""
    app = app or create_app()

    with app.app_context():
        store = BlockedDateStore(db.session)

        if command == 'summary':
            return ConsistencyService(store).summary()

        if command == 'validate':
            return ConsistencyService(store).validate().to_dict()

        if command == 'force-sync':
            return ConsistencyService(store).reconcile().to_dict()

        if command == 'clear-all':
            return {'deletedCount': store.delete_all()}

        if command == 'block-multiple':
            if not args:
                raise SystemExit('block-multiple needs a comma separated list of dates')
            dates = [d.strip() for d in args[0].split(',') if d.strip()]
            reason = args[1] if len(args) > 1 else DEFAULT_REASON
            return BulkBlockService(store).block_many(dates, reason).to_dict()

    raise SystemExit(f"Unknown command '{command}'. Use one of: {', '.join(COMMANDS)}")


def main(argv):
    if not argv or argv[0] not in COMMANDS:
        print(__doc__)
        return 1

    try:
        result = run(argv[0], argv[1:])
    except AppException as e:
        print(f"❌ {e}")
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
