from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Monday 2026-02-02, after a 09:00-10:00 class has ended.
    return datetime(2026, 2, 2, 10, 30, 0)
