"""Pytest fixtures and configuration for Day Weaver tests."""

import pytest
from datetime import date, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from dayweaver.database.database import Base
from dayweaver.database.models import TaskDB
from dayweaver.database.repository import TaskRepository
from dayweaver.models.task import Task, TaskPriority
from dayweaver.models.task_factory import utc_now

from tests.fakes import ManualScheduler


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    # Create engine with StaticPool for in-memory database
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "text": "Test Task",
        "deadline": "2099-01-01 12:00",
        "priority": TaskPriority.MEDIUM,
        "note": None,
        "is_completed": False,
        "created_at": utc_now(),
        "reactions": {},
    }


@pytest.fixture
def make_task(sample_task_base):
    """Factory for Task objects with a fresh id per call."""
    def _make(**overrides) -> Task:
        return Task(**{**sample_task_base, "id": str(uuid.uuid4()), **overrides})
    return _make


@pytest.fixture
def seed_tasks(db_session: Session):
    """Insert tasks straight into the store, keeping their ids and timestamps."""
    def _seed(*tasks: Task):
        for task in tasks:
            db_session.add(TaskDB.from_pydantic(task))
        db_session.commit()
        return list(tasks)
    return _seed


@pytest.fixture
def future_date():
    """A deadline date safely in the future for form submissions."""
    return date.today() + timedelta(days=30)


@pytest.fixture
def scheduler():
    """Manually advanced timer scheduler."""
    return ManualScheduler()


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from dayweaver.api.app import app
    from dayweaver.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
