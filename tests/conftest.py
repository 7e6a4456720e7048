"""
Pytest fixtures for Monobase API tooling tests.

Database tests run against an in-memory SQLite database through the shared
DatabaseManager. Registrar tests use an in-memory fake store.
"""

from contextlib import nullcontext
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from monobase.config import Settings, get_settings
from monobase.db import db
from monobase.models import tag_set_key
from monobase.schemas import (
    TemplateContent,
    TemplateDefinition,
    TemplateMetadata,
    TemplateVariable,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_settings():
    """Build Settings without reading a .env file."""

    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def test_db():
    """Initialize the global db object with a fresh in-memory database."""
    if db.is_initialized:
        db.reset()
    db.initialize("sqlite://")
    db.create_all_tables()
    yield db
    db.reset()


@pytest.fixture
def test_session(test_db):
    """Get a session on the test database."""
    session = test_db.SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class RecordingLogger:
    """Logger that keeps (level, event, context) tuples."""

    def __init__(self):
        self.records: list[tuple[str, str, dict]] = []

    def debug(self, event: str, **kwargs) -> None:
        self.records.append(("debug", event, kwargs))

    def warning(self, event: str, **kwargs) -> None:
        self.records.append(("warning", event, kwargs))

    def error(self, event: str, **kwargs) -> None:
        self.records.append(("error", event, kwargs))

    def events(self, level: str | None = None) -> list[str]:
        return [event for lvl, event, _ in self.records if level is None or lvl == level]


class FakeTemplateRepository:
    """
    In-memory stand-in for EmailTemplateRepository.

    `fail_find_on` takes tag sets whose lookup should raise; `fail_create_on`
    takes template names whose insert should raise. `create_error` overrides
    the exception raised on insert. `concurrent_insert_on` takes template names
    whose tag set another writer stores just before their insert collides.
    """

    def __init__(
        self,
        existing_tag_sets=(),
        fail_find_on=(),
        fail_create_on=(),
        create_error: Exception | None = None,
        concurrent_insert_on=(),
    ):
        self.stored = [
            SimpleNamespace(id=f"existing-{i}", name=f"existing-{i}", tags=list(tags))
            for i, tags in enumerate(existing_tag_sets)
        ]
        self.fail_find_on = {tag_set_key(tags) for tags in fail_find_on}
        self.fail_create_on = set(fail_create_on)
        self.create_error = create_error
        self.concurrent_insert_on = set(concurrent_insert_on)
        self.find_calls: list[dict] = []
        self.create_calls: list = []
        self.savepoints = 0

    def savepoint(self):
        self.savepoints += 1
        return nullcontext()

    def find_many(self, *, tags=None, status=None, limit=100, offset=0):
        self.find_calls.append({"tags": list(tags), "limit": limit, "offset": offset})
        key = tag_set_key(tags)
        if key in self.fail_find_on:
            raise RuntimeError("lookup failed")
        matches = [record for record in self.stored if tag_set_key(record.tags) == key]
        return matches[offset:offset + limit]

    def create_template(self, data):
        self.create_calls.append(data)
        if data.name in self.concurrent_insert_on:
            self.stored.append(
                SimpleNamespace(id="concurrent", name="concurrent", tags=list(data.tags))
            )
            raise IntegrityError("INSERT INTO email_templates", {}, Exception("UNIQUE constraint failed"))
        if data.name in self.fail_create_on:
            raise self.create_error or RuntimeError("insert failed")
        record = SimpleNamespace(
            id=f"tpl-{len(self.stored) + 1}", name=data.name, tags=list(data.tags)
        )
        self.stored.append(record)
        return record


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def fake_repository():
    """Factory for FakeTemplateRepository instances."""
    return FakeTemplateRepository


@pytest.fixture
def make_definition():
    """Factory for small template definitions."""

    def _make(name: str, tags: list[str], subject: str | None = None, html: str | None = None):
        return TemplateDefinition(
            metadata=TemplateMetadata(
                name=name,
                description=f"{name} template",
                subject=subject or f"{name} subject",
                tags=tags,
                variables=[
                    TemplateVariable(id="name", type="string", label="Recipient Name", required=True),
                    TemplateVariable(id="link", type="url", label="Link", required=True),
                ],
            ),
            content=TemplateContent(
                html=html or f"<p>{name} for {{{{name}}}}</p>",
                text=f"{name} for {{{{name}}}}",
            ),
        )

    return _make
