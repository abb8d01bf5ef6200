from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from bakery.api.deps import get_store
from bakery.main import app
from bakery.models.enums import Occasion
from bakery.services.catalog_store import CatalogStore


@pytest.fixture
def client(store: CatalogStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _create(client: TestClient, **payload) -> dict:
    response = client.post("/api/cakes/", json=payload)
    assert response.status_code == 201
    return response.json()


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_fetch_cake(client: TestClient) -> None:
    created = _create(client, name="Lemon Drizzle", occasion=Occasion.WEDDING.value, price=15.25, quantity=2)

    assert created["name"] == "Lemon Drizzle"
    assert created["occasion"] == 200
    assert created["price"] == pytest.approx(15.25)
    assert created["quantity"] == 2

    fetched = client.get(f"/api/cakes/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_create_cake_defaults_price_and_quantity(client: TestClient) -> None:
    created = _create(client, name="Plain", occasion=0)

    assert created["price"] == 0
    assert created["quantity"] == 0


def test_create_cake_validation_errors(client: TestClient) -> None:
    missing_name = client.post("/api/cakes/", json={"occasion": 0})
    assert missing_name.status_code == 422
    assert missing_name.json() == {"detail": "name required", "field": "name"}

    bad_occasion = client.post("/api/cakes/", json={"name": "Odd", "occasion": 999})
    assert bad_occasion.status_code == 422
    assert bad_occasion.json()["detail"] == "invalid occasion"

    assert client.get("/api/cakes/").json() == []


def test_sample_cake(client: TestClient) -> None:
    response = client.post("/api/cakes/sample")

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Racing Car"
    assert data["occasion"] == Occasion.BIRTHDAY.value
    assert data["price"] == pytest.approx(7.96)
    assert data["quantity"] == 10


def test_list_cakes(client: TestClient) -> None:
    _create(client, name="One", occasion=0)
    _create(client, name="Two", occasion=100)

    response = client.get("/api/cakes/")

    assert response.status_code == 200
    assert sorted(cake["name"] for cake in response.json()) == ["One", "Two"]


def test_update_cake(client: TestClient) -> None:
    created = _create(client, name="Fruit", occasion=100, price=9.0, quantity=1)

    response = client.patch(f"/api/cakes/{created['id']}", json={"quantity": 5})

    assert response.status_code == 200
    assert response.json() == created | {"quantity": 5}


def test_update_missing_cake_returns_404(client: TestClient) -> None:
    response = client.patch("/api/cakes/999", json={"quantity": 5})

    assert response.status_code == 404


def test_update_rejects_null_name(client: TestClient) -> None:
    created = _create(client, name="Fruit", occasion=100)

    response = client.patch(f"/api/cakes/{created['id']}", json={"name": None})

    assert response.status_code == 422
    assert client.get(f"/api/cakes/{created['id']}").json()["name"] == "Fruit"


def test_delete_cake(client: TestClient) -> None:
    created = _create(client, name="Short-lived", occasion=0)

    assert client.delete(f"/api/cakes/{created['id']}").status_code == 204
    assert client.get(f"/api/cakes/{created['id']}").status_code == 404
    assert client.delete(f"/api/cakes/{created['id']}").status_code == 404


def test_delete_all_cakes(client: TestClient) -> None:
    for name in ("A", "B", "C"):
        _create(client, name=name, occasion=0)

    response = client.delete("/api/cakes/")

    assert response.status_code == 200
    assert response.json() == {"deleted": 3}
    assert client.get("/api/cakes/").json() == []


def test_huge_cake_id_is_not_found(client: TestClient) -> None:
    huge_id = 99999999999999999999

    assert client.get(f"/api/cakes/{huge_id}").status_code == 404
    assert client.patch(f"/api/cakes/{huge_id}", json={"quantity": 1}).status_code == 404
    assert client.delete(f"/api/cakes/{huge_id}").status_code == 404


def test_boolean_occasion_is_rejected(client: TestClient) -> None:
    response = client.post("/api/cakes/", json={"name": "Typed", "occasion": False})

    assert response.status_code == 422
    assert client.get("/api/cakes/").json() == []
