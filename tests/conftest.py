# tests/conftest.py
import os

# Must be set before portal.core.config is imported anywhere.
os.environ["DATABASE_URL"] = os.environ.get("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker as _sessionmaker
from sqlalchemy.pool import StaticPool

import portal.models  # noqa: F401  (registers every table in Base.metadata)
from portal.core.config import settings
from portal.core.db import build_engine, get_db
from portal.core.rbac import Role
from portal.core.security import create_access_token
from portal.main import app
from portal.models.base import Base


@pytest.fixture(scope="session")
def engine():
    """
    One database for the whole run: in-memory SQLite unless TEST_DATABASE_URL is set.
    StaticPool: every connect() gets the same DBAPI connection, so the schema survives.
    """
    url = settings.database_url
    kwargs = {}
    if make_url(url).get_backend_name() == "sqlite":
        kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

    eng = build_engine(url, **kwargs)
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def connection(engine):
    """
    Isolation pattern (SQLAlchemy 2.x):
      - connection per test
      - OUTER transaction begun before anything else
      - every Session joins it with join_transaction_mode="create_savepoint",
        so commit()/rollback() inside the code under test only touch a SAVEPOINT

    Teardown rolls back the OUTER transaction: nothing leaks between tests.
    """
    conn = engine.connect()
    outer = conn.begin()
    try:
        yield conn
    finally:
        if outer.is_active:
            outer.rollback()
        conn.close()


@pytest.fixture()
def session_factory(connection):
    return _sessionmaker(
        bind=connection,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    """
    API client. Each request gets its own Session (like production),
    bound to the test connection.
    """

    def _override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)


# -----------------------------------------------------------------------------
# Session tokens
# -----------------------------------------------------------------------------

def auth_headers(role: Role, actor_id=None, email: str | None = None) -> dict[str, str]:
    token = create_access_token(subject=actor_id or uuid4(), role=role, email=email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def editor_id():
    return uuid4()


@pytest.fixture()
def client_id():
    return uuid4()


@pytest.fixture()
def editor_headers(editor_id):
    return auth_headers(Role.editor, editor_id, email="editor@creomotion.studio")


@pytest.fixture()
def client_headers(client_id):
    return auth_headers(Role.client, client_id, email="client@brand.example")
