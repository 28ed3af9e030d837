import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from customer_api.db.database import Base, SessionLocal, engine
from customer_api.main import app


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def customer(client):
    payload = {"name": "Ada Lovelace", "phone": "555-0001", "email": "ada@example.com"}
    response = client.post("/api/customers/", json=payload)
    assert response.status_code == 201
    return response.json()["customer"]
