"""
Shared fixtures: an in-memory SQLite database per test and an app wired to it.
"""
import pytest
from fastapi.testclient import TestClient

from penpal.config import Settings
from penpal.database import Database
from penpal.main import create_app
from penpal.models.db_models import CelebrityDB, UserDB
from penpal.services.fulfillment import FulfillmentResult
from penpal.errors import FulfillmentError


class StubFulfillmentClient:
    """Stands in for HandwryttenClient; records calls, returns or raises."""

    def __init__(self, result=None, error=None):
        self.result = result or FulfillmentResult(order_id="HW-1001", status="sent", preview_url=None)
        self.error = error
        self.calls = []

    async def send_letter(self, profile, message, **kwargs):
        self.calls.append({"profile": profile, "message": message, **kwargs})
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=str(tmp_path),
        database_url="sqlite://",
        log_level="WARNING",
        seed_on_startup=False,
    )


@pytest.fixture
def database(settings):
    database = Database(settings.database_url)
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def failing_client():
    return StubFulfillmentClient(error=FulfillmentError("Handwrytten request failed: timeout"))


@pytest.fixture
def succeeding_client():
    return StubFulfillmentClient(
        result=FulfillmentResult(order_id="HW-2002", status="sent", preview_url="https://example.test/p/2002")
    )


@pytest.fixture
def app(settings, database):
    return create_app(settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# ROW HELPERS
# =============================================================================

def make_user(db, email="owner@example.com", display_name="Owner"):
    user = UserDB(email=email, password_hash="x", display_name=display_name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_celebrity(db, name="Jane Doe", is_public=True, created_by=None,
                   address="Jane Doe\n123 Main St\nSpringfield, IL 62704", **kwargs):
    profile = CelebrityDB(
        name=name,
        category=kwargs.pop("category", "actors"),
        fanmail_address=address,
        is_public=is_public,
        created_by_user_id=created_by.id if created_by else None,
        verified=kwargs.pop("verified", False),
        popularity_score=kwargs.pop("popularity_score", 0),
        **kwargs,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile
