"""
NoteDrawer Backend — Configuration and Startup Tests
=====================================================

What:  Settings validation and the fatal-startup behaviour of the lifespan.
"""

import pytest
from pydantic import ValidationError

import notedrawer.main as main_module
from notedrawer.config import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(database_url="sqlite+aiosqlite:///x.db", jwt_secret="s")

        assert settings.backend_port == 4000
        assert settings.jwt_expire_days == 7
        assert settings.bcrypt_rounds == 10
        assert settings.jwt_algorithm == "HS256"

    def test_validate_required_names_every_missing_value(self):
        settings = Settings(database_url="", jwt_secret="")

        with pytest.raises(ValueError) as exc_info:
            settings.validate_required()

        assert "DATABASE_URL" in str(exc_info.value)
        assert "JWT_SECRET" in str(exc_info.value)

    def test_validate_required_passes_when_configured(self):
        Settings(database_url="sqlite+aiosqlite:///x.db", jwt_secret="s").validate_required()

    def test_log_level_is_normalised(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_bcrypt_rounds_lower_bound(self):
        with pytest.raises(ValidationError):
            Settings(bcrypt_rounds=3)

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestStartup:
    """The server must not come up without its secret or its store."""

    @pytest.fixture(autouse=True)
    def quiet_logging(self, monkeypatch):
        monkeypatch.setattr(main_module, "setup_logging", lambda level="INFO": None)

    @pytest.mark.asyncio
    async def test_missing_configuration_is_fatal(self):
        app = main_module.create_app(settings=Settings(database_url="", jwt_secret=""))

        with pytest.raises(ValueError):
            async with main_module.lifespan(app):
                pass

    @pytest.mark.asyncio
    async def test_unreachable_store_is_fatal(self, tmp_path):
        unreachable = tmp_path / "missing-dir" / "notes.db"
        settings = Settings(
            database_url=f"sqlite+aiosqlite:///{unreachable}",
            jwt_secret="s",
        )
        app = main_module.create_app(settings=settings)

        with pytest.raises(Exception):
            async with main_module.lifespan(app):
                pass
        assert app.state.database is None

    @pytest.mark.asyncio
    async def test_startup_connects_and_shutdown_disposes(self, test_settings):
        app = main_module.create_app(settings=test_settings)

        async with main_module.lifespan(app):
            assert app.state.database is not None
            await app.state.database.check_connection()
