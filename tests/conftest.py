import os

os.environ.setdefault("DATABASE_URL", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret")

import mongomock
import pytest
from bson.objectid import ObjectId
from fastapi.testclient import TestClient

from database import ensure_indexes, get_db
from main import app


@pytest.fixture
def db():
    database = mongomock.MongoClient()["storefront_test"]
    ensure_indexes(database)
    return database


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def user_id(db):
    result = db["user"].insert_one(
        {
            "firstName": "Asha",
            "lastName": "Verma",
            "phoneNumber": "9000000001",
            "address": "12 Station Road",
            "password": "not-a-real-hash",
            "role": "customer",
            "totalPurchaseAmount": 0,
            "orders": [],
        }
    )
    return str(result.inserted_id)


@pytest.fixture
def category_id(client):
    response = client.post("/categories", json={"name": "Mithai"})
    assert response.status_code == 201
    return response.json()["result"]["category"]["id"]


@pytest.fixture
def product_id(client, category_id):
    response = client.post(
        "/products",
        json={"name": "Kaju Katli", "images": ["kaju.jpg"], "price": 100, "category": category_id},
    )
    assert response.status_code == 201
    return response.json()["result"]["product"]["id"]


@pytest.fixture
def second_product_id(client, category_id):
    response = client.post(
        "/products",
        json={"name": "Rasgulla", "images": ["rasgulla.jpg"], "price": 50, "category": category_id},
    )
    assert response.status_code == 201
    return response.json()["result"]["product"]["id"]


@pytest.fixture
def missing_id():
    return str(ObjectId())
