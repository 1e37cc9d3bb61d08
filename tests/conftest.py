"""
Pytest Configuration and Shared Fixtures

Fixtures:
    - test_settings: Settings pointing at a temporary SQLite DB and upload dir
    - fake_gateway: in-memory stand-in for the Razorpay client
    - app / client: FastAPI app built with create_app() and its TestClient
    - database / db_session: opened Database for service-level tests
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.database.database import Database
from main import create_app


class FakeGateway:
    """Records create_order calls and returns sequential order ids."""

    def __init__(self):
        self.calls = []
        self.error = None
        self.closed = False
        self._counter = 0

    async def create_order(self, amount, currency, payment_capture=True, receipt=None, notes=None):
        self.calls.append({"amount": amount, "currency": currency, "payment_capture": payment_capture})
        if self.error is not None:
            raise self.error
        self._counter += 1
        return {
            "id": f"order_test{self._counter:04d}",
            "amount": amount,
            "currency": currency,
            "status": "created",
        }

    async def aclose(self):
        self.closed = True


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'applications.db'}",
        upload_dir=str(tmp_path / "uploads"),
        public_dir=str(tmp_path / "public"),
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret="rzp_test_secret",
        submission_fee_rupees=Decimal("500"),
        currency="INR",
    )


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def app(test_settings, fake_gateway):
    return create_app(settings=test_settings, gateway=fake_gateway)


@pytest.fixture
def client(app):
    """TestClient used as a context manager so the lifespan opens the DB."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(test_settings):
    db = Database(test_settings.database_url).open()
    yield db
    db.close()


@pytest.fixture
def db_session(database):
    session_gen = database.session()
    session = next(session_gen)
    yield session
    session_gen.close()
