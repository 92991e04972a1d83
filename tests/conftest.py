import os

# Must be set before main imports the settings
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from fakes import FakeAuthClient, InMemoryStorage  # noqa: E402
from preppal.application.attachments.attachment_service import AttachmentManager  # noqa: E402
from preppal.infrastructure.db.base import Base  # noqa: E402
from preppal.infrastructure.db.models import Chapter, Exam, Subject  # noqa: E402
from preppal.presentation.dependencies import get_auth_client, get_db, get_storage_client  # noqa: E402

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

ADMIN_TOKEN = "admin-token"
ADMIN_USER_ID = "user-admin"


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def storage():
    return InMemoryStorage()


@pytest.fixture()
def attachments(storage):
    return AttachmentManager(storage)


@pytest.fixture()
def auth():
    auth_client = FakeAuthClient()
    auth_client.add_user("admin@example.com", "secret", ADMIN_USER_ID)
    auth_client.start_session(ADMIN_USER_ID, "admin@example.com", ADMIN_TOKEN)
    return auth_client


@pytest.fixture()
def client(db, storage, auth):
    from main import app

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_client] = lambda: storage
    app.dependency_overrides[get_auth_client] = lambda: auth
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture()
def hierarchy(db):
    """Ids for JEE/Physics/{Mechanics,Optics} and NEET/Biology/Cells."""
    jee = Exam(name="JEE")
    neet = Exam(name="NEET")
    db.add_all([jee, neet])
    db.flush()
    physics = Subject(name="Physics", exam_id=jee.id)
    biology = Subject(name="Biology", exam_id=neet.id)
    db.add_all([physics, biology])
    db.flush()
    mechanics = Chapter(name="Mechanics", subject_id=physics.id, order=1)
    optics = Chapter(name="Optics", subject_id=physics.id, order=2)
    cells = Chapter(name="Cells", subject_id=biology.id, order=1)
    db.add_all([mechanics, optics, cells])
    db.commit()
    rows = {
        "jee": jee,
        "neet": neet,
        "physics": physics,
        "biology": biology,
        "mechanics": mechanics,
        "optics": optics,
        "cells": cells,
    }
    return {name: row.id for name, row in rows.items()}
