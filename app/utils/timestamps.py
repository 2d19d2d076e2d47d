"""
Naive UTC timestamps, the form every DateTime column stores
"""

from datetime import datetime, timezone


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)
