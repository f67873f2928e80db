import asyncio
import os
import sys
import tempfile

# Ensure the backend package is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="collabhub-storage-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(), "unused.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from collabhub.core.database import Base, get_db
from collabhub.main import app

DEFAULT_PASSWORD = "password123"


@pytest.fixture
def client(tmp_path):
    # a throw-away SQLite file per test
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    TestingSessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


@pytest.fixture
def make_user(client):
    """Register + login; returns (user_id, auth headers, token)."""

    def _make_user(email, full_name=None, password=DEFAULT_PASSWORD):
        res = client.post(
            "/auth/register",
            json={"email": email, "password": password, "full_name": full_name},
        )
        assert res.status_code == 201, res.text
        token_res = client.post("/auth/token", data={"username": email, "password": password})
        assert token_res.status_code == 200, token_res.text
        token = token_res.json()["access_token"]
        return res.json()["id"], {"Authorization": f"Bearer {token}"}, token

    return _make_user


@pytest.fixture
def create_project(client):
    def _create_project(headers, **overrides):
        payload = {
            "title": "Landing page",
            "description": "Build a landing page for the robotics club",
            "category": "Web Development",
            "budget_min": 100,
            "budget_max": 500,
            "skills_required": ["React", "Node"],
        }
        payload.update(overrides)
        res = client.post("/projects/", json=payload, headers=headers)
        assert res.status_code == 201, res.text
        return res.json()

    return _create_project


@pytest.fixture
def apply_to(client):
    def _apply_to(project_id, headers, bid_amount=200, proposal="I can do this"):
        return client.post(
            f"/projects/{project_id}/applications",
            json={"proposal": proposal, "bid_amount": bid_amount, "estimated_duration": "2 weeks"},
            headers=headers,
        )

    return _apply_to


@pytest.fixture
def assigned_project(client, make_user, create_project, apply_to):
    """A project whose client accepted a freelancer's application."""
    client_id, client_headers, _ = make_user("client@example.com", "Carol Client")
    freelancer_id, freelancer_headers, freelancer_token = make_user("freelancer@example.com", "Fred Freelancer")
    project = create_project(client_headers)
    application = apply_to(project["id"], freelancer_headers).json()
    res = client.post(
        f"/projects/{project['id']}/applications/{application['id']}/accept",
        headers=client_headers,
    )
    assert res.status_code == 200, res.text
    return {
        "project_id": project["id"],
        "client_id": client_id,
        "client_headers": client_headers,
        "freelancer_id": freelancer_id,
        "freelancer_headers": freelancer_headers,
        "freelancer_token": freelancer_token,
    }
