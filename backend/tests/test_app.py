"""
Contacts API — Application-Level Tests
========================================

What:  Health check, service descriptor, fallback error handling, request
       IDs and configuration-driven behavior of create_app().
"""

import logging

import pytest
from httpx import AsyncClient, ASGITransport

from app import __version__
from app.config import settings
from app.main import create_app


def _client(app, raise_app_exceptions=True):
    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    return AsyncClient(transport=transport, base_url="http://test")


class TestHealthAndInfo:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["message"]
        assert "T" in body["timestamp"]

    @pytest.mark.asyncio
    async def test_service_descriptor(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["version"] == __version__
        assert body["endpoints"]["health"] == "/health"
        assert body["endpoints"]["contacts"] == "/contacts"


class TestFallbackErrors:

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/nope")
        assert response.status_code == 404
        assert response.json() == {
            "error": "NotFoundError",
            "message": "Resource /nope not found",
        }

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, test_client):
        response = await test_client.delete("/contacts")
        assert response.status_code == 405
        assert response.json()["error"] == "MethodNotAllowed"

    @pytest.mark.asyncio
    async def test_unexpected_error_hides_details(self, store, monkeypatch):
        monkeypatch.setattr(settings, "environment", "production")
        app = create_app(store=store)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        async with _client(app, raise_app_exceptions=False) as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "error": "InternalServerError",
            "message": "Internal server error",
        }

    @pytest.mark.asyncio
    async def test_unexpected_error_stack_in_development(self, store, monkeypatch):
        monkeypatch.setattr(settings, "environment", "development")
        app = create_app(store=store)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        async with _client(app, raise_app_exceptions=False) as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        stack = response.json()["stack"]
        assert any("RuntimeError: secret internals" in line for line in stack)

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id_and_cors(self, store, caplog):
        app = create_app(store=store)
        origin = settings.allowed_origins_list[0]

        @app.get("/boom")
        async def boom():
            raise RuntimeError("secret internals")

        with caplog.at_level(logging.INFO, logger="contacts.access"):
            async with _client(app) as client:
                response = await client.get(
                    "/boom", headers={"X-Request-ID": "r2", "Origin": origin}
                )

        assert response.status_code == 500
        assert response.json()["error"] == "InternalServerError"
        assert response.headers["X-Request-ID"] == "r2"
        assert response.headers["Access-Control-Allow-Origin"] == origin

        messages = [record.getMessage() for record in caplog.records]
        assert any("[r2]" in m and "secret internals" in m for m in messages)
        assert any(m.startswith("GET /boom 500") and "(RuntimeError)" in m for m in messages)


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated(self, test_client):
        response = await test_client.get("/contacts")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_supplied_is_echoed(self, test_client):
        response = await test_client.get("/contacts", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_error_handlers_log_request_id(self, test_client, caplog):
        await test_client.post("/contacts", json={"name": "张三", "phone": "13800138001"})
        with caplog.at_level(logging.WARNING, logger="app.main"):
            response = await test_client.post(
                "/contacts",
                json={"name": "李四", "phone": "13800138001"},
                headers={"X-Request-ID": "dup-1"},
            )
        assert response.status_code == 409
        assert response.headers["X-Request-ID"] == "dup-1"
        assert any(
            "[dup-1] ConflictError" in record.getMessage()
            for record in caplog.records
            if record.name == "app.main"
        )

    @pytest.mark.asyncio
    async def test_access_line_skips_health(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="contacts.access"):
            await test_client.get("/health")
            await test_client.get("/contacts", headers={"X-Request-ID": "list-1"})
        lines = [r.getMessage() for r in caplog.records if r.name == "contacts.access"]
        assert not any("/health" in line for line in lines)
        assert any(line.startswith("GET /contacts 200") and "[list-1]" in line for line in lines)


class TestConfiguration:

    @pytest.mark.asyncio
    async def test_api_prefix(self, store, monkeypatch):
        monkeypatch.setattr(settings, "api_prefix", "/api")
        app = create_app(store=store)
        async with _client(app) as client:
            assert (await client.get("/api/contacts")).status_code == 200
            assert (await client.get("/contacts")).status_code == 404
            info = (await client.get("/")).json()
        assert info["endpoints"]["contacts"] == "/api/contacts"

    @pytest.mark.asyncio
    async def test_default_store_is_seeded(self, monkeypatch):
        monkeypatch.setattr(settings, "seed_example_contacts", True)
        app = create_app()
        async with _client(app) as client:
            contacts = (await client.get("/contacts")).json()
        assert [c["id"] for c in contacts] == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_seeding_can_be_disabled(self, monkeypatch):
        monkeypatch.setattr(settings, "seed_example_contacts", False)
        app = create_app()
        async with _client(app) as client:
            assert (await client.get("/contacts")).json() == []
