import os

# Settings are read once and cached; pin them before anything imports foodie
os.environ["ENV_MODE"] = "development"
os.environ["ADMIN_PASSWORD"] = "letmein"
os.environ["SESSION_SECRET_KEY"] = "test-secret-key"
os.environ["OTP_VERIFY_DELAY_SECONDS"] = "0"
os.environ["UPI_PAYEE_VPA"] = "foodie-restaurant@okicici"
os.environ["UPI_MERCHANT_NAME"] = "Foodie Restaurant"

import pytest
from fastapi.testclient import TestClient

from foodie.main import app
from foodie.schemas import MenuItem
from foodie.services.foodieos import MockFoodieService, get_foodie_service
from foodie.services.geo import get_geo_service
from foodie.services.geo.mock import MockGeoService
from foodie.services.media import MockMediaService, get_media_service
from foodie.services.menu import InMemoryMenuRepository, get_menu_repository
from foodie.services.payment import UpiPaymentService
from foodie.services.sessions import get_session_store


@pytest.fixture
def foodie_service():
    return MockFoodieService(min_latency=0, max_latency=0)


@pytest.fixture
def geo_service():
    return MockGeoService(min_latency=0, max_latency=0)


@pytest.fixture
def media_service():
    return MockMediaService()


@pytest.fixture
def menu_repository():
    return InMemoryMenuRepository(seed=True)


@pytest.fixture
def payment_service():
    return UpiPaymentService(
        payee="foodie-restaurant@okicici",
        merchant_name="Foodie Restaurant",
        note="Food Order Payment",
        currency="INR",
    )


@pytest.fixture
def paneer():
    return MenuItem.model_validate({
        "id": "P1",
        "h": "Paneer Tikka",
        "dp": 20000,
        "ct": "STARTERS",
        "veg": True,
        "addOns": [
            {"id": "cheese", "name": "Cheese", "price": 3000},
            {"id": "mint", "name": "Mint Dip", "price": 1500},
        ],
    })


@pytest.fixture
def client(foodie_service, geo_service, media_service, menu_repository):
    app.dependency_overrides[get_foodie_service] = lambda: foodie_service
    app.dependency_overrides[get_geo_service] = lambda: geo_service
    app.dependency_overrides[get_media_service] = lambda: media_service
    app.dependency_overrides[get_menu_repository] = lambda: menu_repository
    get_session_store().clear()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    get_session_store().clear()


@pytest.fixture
def admin_client(client):
    response = client.post("/api/auth/login", json={"password": "letmein"})
    assert response.status_code == 200
    return client
