from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from health_assistant.database import Base
from health_assistant.main import app
from health_assistant.routers.deps import get_report_store, get_summary_store
from health_assistant.services.store import InMemoryStore


@pytest.fixture()
def patient() -> dict:
    return {"name": "Jane Doe", "age": 45, "gender": "Female"}


@pytest.fixture()
def simple_payload(patient) -> dict:
    return {
        "patient": patient,
        "test_date": "2024-01-15",
        "lab_values": [
            {"name": "Hemoglobin", "value": 9.0, "unit": "g/dL"},
            {"name": "Glucose", "value": 110, "unit": "mg/dL"},
            {"name": "Sodium", "value": 140, "unit": "mEq/L"},
        ],
    }


@pytest.fixture()
def complex_payload(patient) -> dict:
    return {
        "patient": patient,
        "metadata": {"sample_collected": "2024-03-01T08:30:00Z", "reported_on": "2024-03-02T10:00:00Z"},
        "tests": [
            {
                "category": "Complete Blood Count",
                "subcategory": None,
                "tests": [
                    {
                        "test_name": "Platelets",
                        "result": {"value": 450, "unit": "K/uL"},
                        "reference_range": {"low": 150, "high": 400},
                        "flag": {"status": "high", "flag_reason": "Above reference"},
                    },
                    {
                        "test_name": "Blood Group",
                        "result": {"value": "O positive", "unit": None},
                    },
                ],
            },
            {
                "category": "Vitamins",
                "tests": [
                    {
                        "test_name": "Vitamin D",
                        "result": {"value": 18, "unit": "ng/mL"},
                        "reference_range": {"low": 30, "high": 100},
                    },
                ],
            },
        ],
    }


@pytest.fixture()
def session_factory() -> Generator:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    report_store = InMemoryStore()
    summary_store = InMemoryStore()
    app.dependency_overrides[get_report_store] = lambda: report_store
    app.dependency_overrides[get_summary_store] = lambda: summary_store

    # Stores are overridden per test; skip app startup side effects.
    original_startup = list(app.router.on_startup)
    app.router.on_startup.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.router.on_startup[:] = original_startup
    app.dependency_overrides.clear()
