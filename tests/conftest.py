from uuid import UUID, uuid4

import pytest


# ==========================================
# FIXTURES
# ==========================================


@pytest.fixture
def point_ids():
    """Named ids A..F, sortable so page boundaries are predictable."""
    return {name: UUID(int=i + 1) for i, name in enumerate("ABCDEF")}


@pytest.fixture
def random_ids():
    return [uuid4() for _ in range(50)]


@pytest.fixture
def no_sleep():
    waits = []
    return waits.append, waits
