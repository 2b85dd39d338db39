import pytest
from fastapi.testclient import TestClient

from skillmark.core.config import Settings
from skillmark.domain.models import Order
from skillmark.infrastructure.repositories.order_repository import CsvOrderRepository, StoreConfig
from skillmark.main import create_app


@pytest.fixture
def csv_path(tmp_path):
    return tmp_path / "data" / "orders.csv"


@pytest.fixture
def repo(csv_path):
    repo = CsvOrderRepository(StoreConfig(csv_path=str(csv_path)))
    repo.initialize_sync()
    return repo


@pytest.fixture
def settings(csv_path):
    return Settings(ORDERS_CSV_PATH=str(csv_path), PROJECT_NAME="SkillMark API")


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def valid_payload():
    return {
        "name": "A",
        "email": "a@x.com",
        "phone": "123",
        "paymentMethod": "qr",
        "certificateType": "Excel",
        "amount": 499,
    }


@pytest.fixture
def make_order():
    def _make(order_id="ED2025000001", **overrides):
        fields = {
            "orderId": order_id,
            "name": "Asha",
            "email": "asha@example.com",
            "phone": "9876543210",
            "whatsapp": "",
            "paymentMethod": "qr",
            "certificateType": "Excel",
            "amount": "499",
            "status": "Order Placed",
            "createdAt": "2025-03-01T10:20:30.123Z",
        }
        fields.update(overrides)
        return Order(**fields)
    return _make
