"""
Product API - Collection Accessor & Lifespan Tests
===================================================

What we test:
    ✅ Missing connection settings are fatal at construction
    ✅ The accessor resolves the configured database and collection
    ✅ ping() and close() delegate to the client
    ✅ The lifespan builds the accessor once and closes it on shutdown
    ✅ The lifespan refuses to start without configuration
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi import FastAPI

from app.config import Settings
from app.database import ProductDbContext
from app.exceptions import ConfigurationError


def _settings(**overrides) -> Settings:
    values = {
        "mongodb_connection_string": "mongodb://db.example:27017",
        "mongodb_database_name": "shop",
        "mongodb_collection_name": "products",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _mock_client() -> MagicMock:
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    client.close = AsyncMock()
    return client


class TestProductDbContext:

    @pytest.mark.parametrize(
        "field, env_name",
        [
            ("mongodb_connection_string", "MONGODB_CONNECTION_STRING"),
            ("mongodb_database_name", "MONGODB_DATABASE_NAME"),
            ("mongodb_collection_name", "MONGODB_COLLECTION_NAME"),
        ],
    )
    def test_missing_value_is_fatal(self, field, env_name):
        with pytest.raises(ConfigurationError) as excinfo:
            ProductDbContext(_settings(**{field: None}), client=_mock_client())

        assert excinfo.value.missing == [env_name]
        assert env_name in excinfo.value.message

    def test_empty_value_counts_as_missing(self):
        with pytest.raises(ConfigurationError):
            ProductDbContext(_settings(mongodb_database_name=""), client=_mock_client())

    def test_all_missing_reported_together(self):
        config = _settings(
            mongodb_connection_string=None,
            mongodb_database_name=None,
            mongodb_collection_name=None,
        )
        with pytest.raises(ConfigurationError) as excinfo:
            ProductDbContext(config)

        assert len(excinfo.value.missing) == 3

    def test_client_built_from_connection_string(self):
        with patch("app.database.AsyncMongoClient") as client_cls:
            ProductDbContext(_settings())

        client_cls.assert_called_once_with("mongodb://db.example:27017")
        client_cls.return_value.get_database.assert_called_once_with("shop")

    def test_products_resolves_configured_collection(self):
        client = _mock_client()
        context = ProductDbContext(_settings(), client=client)

        collection = context.products

        database = client.get_database.return_value
        database.get_collection.assert_called_once_with("products")
        assert collection is database.get_collection.return_value

    @pytest.mark.asyncio
    async def test_ping_and_close_delegate_to_client(self):
        client = _mock_client()
        context = ProductDbContext(_settings(), client=client)

        assert await context.ping() == {"ok": 1.0}
        client.admin.command.assert_awaited_once_with("ping")

        await context.close()
        client.close.assert_awaited_once()


class TestLifespan:

    @pytest.mark.asyncio
    async def test_lifespan_attaches_and_closes_context(self):
        from app.main import lifespan

        app = FastAPI()
        context = MagicMock()
        context.close = AsyncMock()

        with patch("app.main.setup_logging"), \
             patch("app.main.ProductDbContext", return_value=context) as context_cls:
            async with lifespan(app):
                assert app.state.db is context
                context.close.assert_not_awaited()

        context_cls.assert_called_once()
        context.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_lifespan_fails_without_configuration(self, monkeypatch):
        from app.main import lifespan
        from app.config import settings

        monkeypatch.setattr(settings, "mongodb_connection_string", None)
        app = FastAPI()

        with patch("app.main.setup_logging"):
            with pytest.raises(ConfigurationError):
                async with lifespan(app):
                    pytest.fail("application started without configuration")
