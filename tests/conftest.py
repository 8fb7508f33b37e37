# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.db.engine import build_engine, get_engine
from app.db.schema import companies, invoices, metadata
from app.main import app


@pytest.fixture
def engine():
    # One shared in-memory connection so every request sees the same database
    engine = build_engine("sqlite://", poolclass=StaticPool)
    metadata.create_all(engine)
    yield engine
    metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(engine):
    """
    Two companies and three invoices; returns the invoice ids by company.
    """
    with engine.begin() as conn:
        conn.execute(
            companies.insert(),
            [
                {"code": "apple", "name": "Apple Computer", "description": "Maker of OSX."},
                {"code": "ibm", "name": "IBM", "description": "Big blue."},
            ],
        )
        ids = {}
        for comp_code, amt in [("ibm", 400), ("apple", 100), ("apple", 200)]:
            row = conn.execute(
                invoices.insert().values(comp_code=comp_code, amt=amt).returning(invoices.c.id)
            ).one()
            ids.setdefault(comp_code, []).append(row.id)
    return ids
