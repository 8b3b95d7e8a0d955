import os

# Console logging only while testing
os.environ.setdefault("LOG_FILE", "")

import mongomock
import pytest
from fastapi.testclient import TestClient

from udyog_saathi.db import mongodb
from udyog_saathi.main import create_app

BUSINESS = "owner@sharma-electricals.example.com"
WORKER = "ravi@example.com"


@pytest.fixture
def mongo():
    """In-memory MongoDB swapped in for the shared client."""
    client = mongomock.MongoClient()
    mongodb.set_mongo_client(client)
    mongodb.init_mongo_indexes()
    yield mongodb.get_mongo_db()
    mongodb.set_mongo_client(None)


@pytest.fixture
def app(mongo):
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def apply_to(client):
    """Apply as the worker to a business post; returns the application id."""
    def _apply(title="Electrician Needed", business=BUSINESS, applicant=WORKER, name="Ravi"):
        response = client.post("/api/notifications", json={
            "toEmail": business,
            "fromEmail": applicant,
            "fromName": name,
            "title": title,
        })
        assert response.status_code == 200
        notifications = client.get(f"/api/notifications/{applicant}").json()
        return notifications[0]["_id"]
    return _apply
