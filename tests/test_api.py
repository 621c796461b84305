# tests/test_api.py
"""
Tests para la capa HTTP (FastAPI) sobre la máquina expendedora.
"""
import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.main import create_app

BASE = "/api/v1/vending-machine"


@pytest.fixture
def client():
    settings = Settings(
        slot_count=3,
        supported_coins=[0.10, 0.20, 0.50, 1.0],
        initial_coin_quantity=10,
    )
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def _stock(response):
    return {entry["face_value"]: entry["quantity"] for entry in response.json()["coins"]}


class TestMachineEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_get_machine(self, client):
        response = client.get(f"{BASE}/")
        assert response.status_code == 200
        body = response.json()
        assert body["slot_count"] == 3
        assert body["products"][0] == {"index": 0, "price": 0, "quantity": 0}
        assert body["coin_stock"]["total_value"] == 10 * (10 + 20 + 50 + 100)
        assert [entry["coin"] for entry in body["coin_stock"]["coins"]] == [
            "ONE_POUND",
            "FIFTY_P",
            "TWENTY_P",
            "TEN_P",
        ]


class TestProductEndpoints:

    def test_set_price_and_quantity(self, client):
        response = client.post(f"{BASE}/products/1/price/150")
        assert response.status_code == 200
        assert response.json()["price"] == 150

        response = client.post(f"{BASE}/products/1/quantity/4")
        assert response.status_code == 200
        assert response.json() == {"index": 1, "price": 150, "quantity": 4}

        response = client.get(f"{BASE}/products/1")
        assert response.json() == {"index": 1, "price": 150, "quantity": 4}

        products = client.get(f"{BASE}/products").json()
        assert len(products) == 3

    def test_invalid_price(self, client):
        response = client.post(f"{BASE}/products/0/price/0")
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "InvalidArgumentError"

    def test_negative_quantity(self, client):
        response = client.post(f"{BASE}/products/0/quantity/-1")
        assert response.status_code == 400

    def test_unknown_slot(self, client):
        assert client.get(f"{BASE}/products/3").status_code == 404
        assert client.post(f"{BASE}/products/7/quantity/1").status_code == 404


class TestCoinEndpoints:

    def test_set_coin_quantity(self, client):
        response = client.post(f"{BASE}/coins/0.5/quantity/3")
        assert response.status_code == 200
        assert _stock(response)[0.5] == 3

    def test_set_coin_quantity_with_trailing_zero(self, client):
        response = client.post(f"{BASE}/coins/0.10/quantity/7")
        assert response.status_code == 200
        assert _stock(response)[0.1] == 7

    def test_set_all_coin_quantities(self, client):
        response = client.post(f"{BASE}/coins/all/quantity/2")
        assert response.status_code == 200
        assert set(_stock(response).values()) == {2}
        assert response.json()["total_value"] == 2 * 180

    def test_unsupported_face_value(self, client):
        response = client.post(f"{BASE}/coins/0.15/quantity/3")
        assert response.status_code == 400

    def test_coin_not_configured(self, client):
        response = client.post(f"{BASE}/coins/2.0/quantity/3")
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "NotFoundError"


class TestPurchaseEndpoint:

    def _stock_product(self, client, price, quantity=2):
        client.post(f"{BASE}/products/0/price/{price}")
        client.post(f"{BASE}/products/0/quantity/{quantity}")

    def test_purchase_with_change(self, client):
        self._stock_product(client, 100)

        response = client.post(f"{BASE}/products/0/purchase", json={"coins": [1.0, 0.5]})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "completed"
        assert body["change"] == [0.5]
        assert body["change_total"] == 50
        assert client.get(f"{BASE}/products/0").json()["quantity"] == 1

    def test_purchase_exact(self, client):
        self._stock_product(client, 180)

        response = client.post(f"{BASE}/products/0/purchase", json={"coins": [0.1, 0.2, 0.5, 1.0]})

        assert response.status_code == 200
        assert response.json()["change"] == []
        assert set(_stock(client.get(f"{BASE}/coins")).values()) == {11}

    def test_insufficient_funds(self, client):
        self._stock_product(client, 200)
        before = client.get(f"{BASE}/").json()

        response = client.post(f"{BASE}/products/0/purchase", json={"coins": [1.0, 0.5]})

        assert response.status_code == 402
        assert response.json()["detail"]["shortfall"] == 50
        assert client.get(f"{BASE}/").json() == before

    def test_sold_out(self, client):
        self._stock_product(client, 100, quantity=1)
        assert client.post(f"{BASE}/products/0/purchase", json={"coins": [1.0]}).status_code == 200

        response = client.post(f"{BASE}/products/0/purchase", json={"coins": [1.0]})

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "UnavailableError"

    def test_insufficient_change(self, client):
        self._stock_product(client, 130)
        client.post(f"{BASE}/coins/all/quantity/0")
        before = client.get(f"{BASE}/").json()

        response = client.post(f"{BASE}/products/0/purchase", json={"coins": [1.0, 1.0]})

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "InsufficientChangeError"
        assert client.get(f"{BASE}/").json() == before

    def test_unsupported_tendered_coin(self, client):
        self._stock_product(client, 100)
        response = client.post(f"{BASE}/products/0/purchase", json={"coins": [0.3, 1.0]})
        assert response.status_code == 400

    def test_unknown_slot(self, client):
        response = client.post(f"{BASE}/products/9/purchase", json={"coins": [1.0]})
        assert response.status_code == 404
