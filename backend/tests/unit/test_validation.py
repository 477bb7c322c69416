from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from fleet_erp.core.exceptions import NotFoundError
from fleet_erp.utils.validation import require_not_deleted, require_record


def test_require_record():
    record = SimpleNamespace(id=1)
    assert require_record(record, "Vehicle") is record
    with pytest.raises(NotFoundError, match="Vehicle not found"):
        require_record(None, "Vehicle")


def test_require_not_deleted():
    alive = SimpleNamespace(deleted_at=None)
    assert require_not_deleted(alive) is alive

    with pytest.raises(NotFoundError, match="has been deleted"):
        require_not_deleted(SimpleNamespace(deleted_at=datetime.now(timezone.utc)), "Vehicle")
    with pytest.raises(NotFoundError):
        require_not_deleted(None)
