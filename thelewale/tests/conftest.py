from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from thelewale.analytics.store import clear_events
from thelewale.vendors import store
from thelewale.vendors.models import Coordinate, Dish, Vendor, VendorStatus

# Connaught Place, New Delhi
DELHI = Coordinate(latitude=28.6139, longitude=77.2090)
# Rohini, ~14 km north-west of DELHI
ROHINI = Coordinate(latitude=28.7041, longitude=77.1025)
MUMBAI = Coordinate(latitude=19.0760, longitude=72.8777)


@pytest.fixture(autouse=True)
def _clean_state():
    store.clear_store()
    clear_events()
    yield
    store.clear_store()
    clear_events()


@pytest.fixture
def make_vendor():
    def _make(
        name: str,
        description: str = "",
        cuisine: str = "",
        dishes: list[str] | None = None,
        location: Coordinate | None = None,
        status: VendorStatus = VendorStatus.approved,
        added_by: str | None = None,
    ) -> Vendor:
        vendor = Vendor(
            id=uuid.uuid4().hex,
            name=name,
            description=description,
            cuisine=cuisine,
            dishes=[Dish(name=d, price=50) for d in dishes or []],
            location=location,
            status=status,
            added_by=added_by,
            created_at=datetime.now(timezone.utc),
        )
        return store.put_vendor(vendor)

    return _make
