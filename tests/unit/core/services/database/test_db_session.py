"""Unit tests for DbSessionService."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from src.meredith.core.services import DbSessionService
from src.meredith.entities.core.page import PageTable
from src.meredith.runtime.config.config_data import ConfigData, DatabaseConfig
from src.meredith.runtime.context import with_context


class TestDbSessionService:
    """Test cases for engine ownership and session handling."""

    def test_session_scope_commits(self, engine):
        service = DbSessionService(engine)

        with service.session_scope() as session:
            session.add(PageTable(name="Committed"))

        with service.session_scope() as session:
            names = [row.name for row in session.exec(select(PageTable))]
        assert names == ["Committed"]

    def test_session_scope_rolls_back_on_error(self, engine):
        service = DbSessionService(engine)

        with pytest.raises(RuntimeError):
            with service.session_scope() as session:
                session.add(PageTable(name="Discarded"))
                session.flush()
                raise RuntimeError("boom")

        with service.session_scope() as session:
            assert session.exec(select(PageTable)).all() == []

    def test_sessions_do_not_expire_on_commit(self, engine):
        session = DbSessionService(engine).get_session()
        try:
            assert session.expire_on_commit is False
        finally:
            session.close()

    def test_health_check(self, engine):
        assert DbSessionService(engine).health_check() is True

    def test_health_check_failure(self, engine, monkeypatch):
        service = DbSessionService(engine)

        class UnreachableEngine:
            def connect(self):
                raise OperationalError("SELECT 1", {}, Exception("unreachable"))

        monkeypatch.setattr(service, "_engine", UnreachableEngine())

        assert service.health_check() is False

    def test_pool_status_keys(self, engine):
        status = DbSessionService(engine).get_pool_status()

        assert set(status) == {"size", "checked_in", "checked_out", "overflow"}

    def test_builds_engine_from_configuration(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'configured.db'}"

        with with_context(ConfigData(database=DatabaseConfig(url=url))):
            service = DbSessionService()

        try:
            assert service.engine.dialect.name == "sqlite"
            assert service.health_check() is True
        finally:
            service.engine.dispose()
