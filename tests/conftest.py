"""Shared test fixtures and configuration."""
import os

# Must be set before poker.core.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from contextlib import contextmanager  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from poker.main import app  # noqa: E402
from poker.db.base import Base  # noqa: E402
from poker.api.deps import get_db  # noqa: E402
from poker.realtime import CommandDispatcher, InMemoryGateway, RoomSessionManager, VoteEngine  # noqa: E402
from poker.services.rooms import add_membership, create_room  # noqa: E402
from poker.services.users import upsert_user  # noqa: E402


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Start every test with empty rate-limit counters."""
    from poker.core.rate_limit import limiter

    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def fk_db_session():
    """A session on a database that enforces foreign keys, like a server database."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def session_factory(db_session):
    """Session factory for the dispatcher that hands out the test session."""
    @contextmanager
    def factory():
        yield db_session
    return factory


@pytest.fixture
def gateway():
    return InMemoryGateway()


@pytest.fixture
def sessions(gateway):
    return RoomSessionManager(gateway)


@pytest.fixture
def engine(gateway):
    return VoteEngine(gateway)


@pytest.fixture
def dispatcher(gateway, sessions, engine, session_factory):
    return CommandDispatcher(gateway, sessions, engine, session_factory=session_factory)


@pytest.fixture
def alice(db_session):
    return upsert_user(db_session, "u1", "alice@example.com", "Alice")


@pytest.fixture
def bob(db_session):
    return upsert_user(db_session, "u2", "bob@example.com", "Bob")


@pytest.fixture
def carol(db_session):
    return upsert_user(db_session, "u3", "carol@example.com", "Carol")


@pytest.fixture
def room(db_session, alice, bob):
    """Room 123 created by Alice (admin), with Bob as a second participant."""
    created = create_room(db_session, "123", "Sprint 1", alice.id)
    add_membership(db_session, created.id, bob.id)
    return created
