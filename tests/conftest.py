"""Shared test fixtures."""
import importlib.util
import os
import pytest
from datetime import date
from unittest.mock import patch, MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from leadrank.database import Base
from leadrank.records import LeadRecord


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Reset the cached scoring config between tests so each test starts clean."""
    from leadrank.scoring.config import reset_scoring_config
    reset_scoring_config()
    yield
    reset_scoring_config()


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    import leadrank.models.lead
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def patch_db_service_session(db_engine):
    """
    Route get_session() calls inside leadrank.services.db to test sessions.

    The module does `from leadrank.database import get_session` at import time,
    so the local binding is what must be patched. Each call returns a new
    session on the shared in-memory engine, so close() in production code does
    not destroy the test DB.
    """
    TestSession = sessionmaker(bind=db_engine)
    with patch('leadrank.services.db.get_session', side_effect=lambda: TestSession()):
        yield TestSession


@pytest.fixture
def mock_redis():
    """Mock Redis client."""
    mock = MagicMock()
    with patch('leadrank.extensions.redis_client', mock):
        yield mock


@pytest.fixture
def today():
    """Reference date used across scoring tests: mid-December 2024."""
    return date(2024, 12, 10)


@pytest.fixture
def make_record():
    """Factory fixture — builds a LeadRecord with sensible defaults."""
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        defaults = dict(
            id=counter['n'],
            display_name='Maria Lopez',
            email='maria.lopez@example.com',
            phone='+18095551234',
            created_at='2024-12-01T10:00:00+00:00',
            intake_period='February 2025',
            outreach_status='not_contacted',
            is_priority_flagged=False,
        )
        defaults.update(overrides)
        return LeadRecord(**defaults)
    return _make


@pytest.fixture
def load_script():
    """Import a command-line script from scripts/ by name and return the module."""
    scripts_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'scripts')

    def _load(name):
        spec = importlib.util.spec_from_file_location(f'scripts_{name}', os.path.join(scripts_dir, f'{name}.py'))
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    return _load
