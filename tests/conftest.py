"""
Shared fixtures.

The settings module reads the environment at import time, so the test
database is configured here before anything under `app` is imported.
"""
import os

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import json
from datetime import datetime, time, timezone

import pytest
from fastapi.testclient import TestClient

from app import models
from app.api.v1.routers.storefront import get_order_time
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app
from app.services.delivery import DeliveryRule

SHOP = "test-shop.myshopify.com"

# Mon 2025-03-10 09:00 UTC, before the usual 14:00 cutoff
ORDER_TS = datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)


def make_rule(**overrides) -> DeliveryRule:
    """domain rule with scenario A defaults."""
    data = dict(
        id=1,
        name="Standard",
        countries=frozenset({"US"}),
        min_days=2,
        max_days=3,
        processing_days=1,
        cutoff_time=time(14, 0),
        timezone="UTC",
        exclude_weekends=True,
        exclude_holidays=True,
    )
    data.update(overrides)
    return DeliveryRule(**data)


def add_rule(db, store, **overrides) -> models.DeliveryRule:
    """persist a delivery rule row; list fields are given as python lists."""
    data = dict(
        name="Standard",
        countries=["US"],
        min_days=2,
        max_days=3,
        processing_days=1,
        cutoff_time="14:00",
        timezone="UTC",
        exclude_weekends=True,
        exclude_holidays=True,
        priority=0,
        is_active=True,
    )
    data.update(overrides)
    for field in ("countries", "regions", "postal_codes"):
        if isinstance(data.get(field), list):
            data[field] = json.dumps(data[field])
    rule = models.DeliveryRule(store_id=store.id, **data)
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db):
    store = models.Store(shop=SHOP, is_active=True, app_enabled=True)
    store.settings = models.StoreSettings(
        show_on_product_page=True,
        cart_enabled=True,
        checkout_enabled=True,
        aggregation="latest",
        date_format="short",
    )
    db.add(store)
    db.commit()
    db.refresh(store)
    return store


@pytest.fixture
def client(db):
    app.dependency_overrides[get_order_time] = lambda: ORDER_TS
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def storefront_headers():
    return {"X-Shop-Domain": SHOP}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token(SHOP)}"}
