from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import leisure_pricing.models  # noqa: F401
from leisure_pricing.database.connection import Base
from leisure_pricing.domain import PricingRule
from leisure_pricing.stores.memory_store import InMemoryPricingStore

TEST_DB_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def create_test_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    connection = engine.connect()
    trans = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def store():
    return InMemoryPricingStore()


@pytest.fixture()
def fake_request():
    """Stand-in for a Starlette request when route handlers are called directly."""
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))


def make_rule(
    rule_id="RULE_1",
    rule_type="participant_tiers",
    price_modifier=-10.0,
    is_percentage=True,
    priority=0,
    conditions=None,
    business_user_id="BIZ_1",
    offer_id=None,
    is_active=True,
    rule_name=None,
):
    return PricingRule(
        id=rule_id,
        business_user_id=business_user_id,
        rule_name=rule_name or rule_id,
        rule_type=rule_type,
        price_modifier=price_modifier,
        is_percentage=is_percentage,
        priority=priority,
        is_active=is_active,
        offer_id=offer_id,
        conditions=conditions if conditions is not None else {},
    )
