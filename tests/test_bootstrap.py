"""
Tests for the template registration entrypoint.
"""

import pytest

from monobase.db import db
from monobase.mail import bootstrap
from monobase.repositories import EmailTemplateRepository


@pytest.fixture
def file_database(monkeypatch, tmp_path):
    if db.is_initialized:
        db.reset()
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'templates.db'}")
    yield
    db.reset()


def test_registers_module_templates(file_database):
    assert bootstrap.main([]) == 0
    assert bootstrap.main([]) == 0

    with db.session() as session:
        assert EmailTemplateRepository(session).count() == 4


def test_unexpected_error_exits_one(file_database, monkeypatch):
    def broken(session, logger=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(bootstrap, "register_module_templates", broken)

    assert bootstrap.main([]) == 1


def test_invalid_configuration_exits_one(file_database, monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    assert bootstrap.main([]) == 1
    assert "LOG_LEVEL" in capsys.readouterr().err
    assert not db.is_initialized
