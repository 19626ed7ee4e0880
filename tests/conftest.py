# tests/conftest.py
import os
import tempfile
from datetime import datetime, timedelta

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="pling-uploads-")

import pytest
from fastapi.testclient import TestClient

from pling import settings
from pling.db import Base, engine, SessionLocal, get_db
from pling.main import app
from pling.models import Listing, User

ADMIN_TOKEN = "test-admin-token"
BASE_TIME = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_TOKEN", ADMIN_TOKEN)
    monkeypatch.setattr(settings, "SITE_URL", "https://pling.test")

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers():
    return {"X-Admin-Token": ADMIN_TOKEN}


@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "username": f"seller{counter['n']}",
            "first_name": "Test",
            "last_name": "Seller",
            "email": f"seller{counter['n']}@example.com",
            "mobile": "9876543210",
            "city": "Mumbai",
            "sub_city": "Andheri",
        }
        data.update(overrides)
        user = User(**data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def seller(make_user):
    return make_user()


@pytest.fixture()
def make_listing(db, seller):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "seller_id": seller.id,
            "category": "Adult",
            "brand": "Trek",
            "model": "Marlin 7",
            "purchase_year": 2021,
            "price": 50000,
            "gear_transmission": "Multi-Speed",
            "frame_material": "Aluminum",
            "suspension": "Front",
            "condition": "Good",
            "cycle_type": "Mountain",
            "wheel_size": "29",
            "has_receipt": True,
            "images": [],
            "created_at": BASE_TIME + timedelta(hours=counter["n"]),
        }
        data.update(overrides)
        obj = Listing(**data)
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    return _make


@pytest.fixture()
def listing_payload(seller):
    return {
        "sellerId": seller.id,
        "category": "Adult",
        "brand": "Giant",
        "model": "Escape 3",
        "purchaseYear": 2022,
        "price": 40000,
        "gearTransmission": "Multi-Speed",
        "frameMaterial": "Aluminum",
        "suspension": "None",
        "condition": "Like New",
        "cycleType": "Hybrid",
        "wheelSize": "27.5",
        "hasReceipt": True,
        "additionalDetails": "Barely used",
        "images": ["/uploads/a.jpg"],
    }
