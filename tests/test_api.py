"""Tests for HTTP endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.errors import GenerationExhaustedError, StoreUnavailableError
from web_app import create_app


@pytest.mark.asyncio
class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_shorten_url(self, client, records):
        """POST /url with only a URL generates a slug."""
        response = await client.post("/url", json={"url": "https://openai.com"})

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "URL has been shortened successfully!"
        assert len(data["slug"]) == 5
        assert data["shortURL"] == f"http://sho.rt/{data['slug']}"
        assert (await records.get_record(data["slug"])).clicks == 0

    async def test_shorten_then_redirect_counts_clicks(self, client, records):
        create_response = await client.post("/url", json={"url": "https://openai.com"})
        slug = create_response.json()["slug"]
        assert create_response.json()["shortURL"].endswith(f"/{slug}")

        first = await client.get(f"/{slug}", follow_redirects=False)
        assert first.status_code == 302
        assert first.headers["location"] == "https://openai.com"

        second = await client.get(f"/{slug}", follow_redirects=False)
        assert second.status_code == 302

        assert (await records.get_record(slug)).clicks == 2

    async def test_get_url_does_not_count(self, client, records):
        await client.post("/url", json={"slug": "info", "url": "https://example.com/info"})

        for _ in range(2):
            response = await client.get("/url/info")
            assert response.status_code == 200
            assert response.json() == {"url": "https://example.com/info"}

        assert (await records.get_record("info")).clicks == 0

    async def test_custom_slug_is_lowercased(self, client):
        response = await client.post("/url", json={"slug": "MyRepo", "url": "https://github.com/user/repo"})

        assert response.status_code == 201
        assert response.json()["slug"] == "myrepo"
        assert response.json()["shortURL"] == "http://sho.rt/myrepo"

    async def test_case_insensitive_collision(self, client):
        first = await client.post("/url", json={"slug": "Foo_1", "url": "https://a.com"})
        assert first.status_code == 201

        second = await client.post("/url", json={"slug": "foo_1", "url": "https://b.com"})
        assert second.status_code == 400
        assert "slug in use" in second.json()["message"].lower()

        lookup = await client.get("/url/foo_1")
        assert lookup.json() == {"url": "https://a.com"}

    async def test_get_url_not_found(self, client):
        response = await client.get("/url/nonexistent-slug")

        assert response.status_code == 404
        assert response.json() == {"error": "URL not found"}

    async def test_redirect_not_found(self, client, store):
        response = await client.get("/nonexistent-slug", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "URL not found"}
        assert store.writes == []

    @pytest.mark.parametrize(
        "body",
        [
            {"url": "not-a-url"},
            {},
            {"slug": "has space", "url": "https://example.com"},
            {"slug": "x" * 256, "url": "https://example.com"},
        ],
    )
    async def test_validation_errors(self, client, store, body):
        response = await client.post("/url", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["message"]
        assert "stack" in data
        assert store.writes == []

    async def test_unparsable_body(self, client):
        response = await client.post(
            "/url",
            content="{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert "message" in response.json()

    async def test_store_unavailable(self, client, store, monkeypatch):
        monkeypatch.setattr(store, "get", AsyncMock(side_effect=StoreUnavailableError("connection refused")))

        for response in (
            await client.get("/url/abc12"),
            await client.get("/abc12", follow_redirects=False),
            await client.post("/url", json={"slug": "abc12", "url": "https://example.com"}),
        ):
            assert response.status_code == 503
            assert response.json()["message"] == "Service temporarily unavailable, please try again."

    async def test_unclassified_error(self, client, records, monkeypatch):
        monkeypatch.setattr(records, "create_record", AsyncMock(side_effect=RuntimeError("boom")))

        response = await client.post("/url", json={"url": "https://example.com"})

        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "boom"
        assert "RuntimeError" in data["stack"]

    async def test_generation_exhausted(self, client, records, monkeypatch):
        monkeypatch.setattr(
            records.generator,
            "generate_unique",
            AsyncMock(side_effect=GenerationExhaustedError(10)),
        )

        response = await client.post("/url", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert "10 attempts" in response.json()["message"]

    async def test_homepage(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]

    async def test_security_headers(self, client):
        response = await client.get("/url/nonexistent-slug")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "SAMEORIGIN"
        assert response.headers["referrer-policy"] == "no-referrer"

    async def test_cors(self, client):
        response = await client.get("/url/nonexistent-slug", headers={"Origin": "https://elsewhere.dev"})

        assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
class TestProductionMode:
    """Production hides stacks and builds https short URLs."""

    @pytest.fixture
    async def prod_client(self, store, records):
        config = Config(
            kv_rest_api_url="memory://",
            kv_rest_api_token="test-token",
            domain="sho.rt",
            environment="production",
        )
        app = create_app(config=config, store=store, records=records)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            yield ac

    async def test_short_url_uses_https(self, prod_client):
        response = await prod_client.post("/url", json={"slug": "prod", "url": "https://example.com"})

        assert response.status_code == 201
        assert response.json()["shortURL"] == "https://sho.rt/prod"

    async def test_error_has_no_stack(self, prod_client):
        response = await prod_client.post("/url", json={"url": "not-a-url"})

        assert response.status_code == 400
        assert "stack" not in response.json()
