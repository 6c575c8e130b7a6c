import pytest
from fastapi.testclient import TestClient
from inventory_api.main import create_app
from inventory_api.infrastructure.db import DataStoreGateway

@pytest.fixture
def gateway(tmp_path):
    gw = DataStoreGateway(f"sqlite:///{tmp_path / 'inventory.db'}")
    yield gw
    gw.dispose()

@pytest.fixture
def client(gateway):
    # entering the client runs the lifespan, which creates and seeds the schema
    with TestClient(create_app(gateway)) as client:
        yield client

@pytest.fixture
def add_item(client):
    def _add(item_name="Widget", quantity=4, per_unit_price=2.5):
        resp = client.post("/api/addItems", json={
            "item_name": item_name,
            "quantity": quantity,
            "per_unit_price": per_unit_price,
        })
        assert resp.status_code == 201
        return resp.json()["data"]
    return _add
