"""Tests for the redirect endpoints."""

import pytest

from tests.utils import create_test_url


@pytest.mark.api
class TestRedirect:
    """GET /api/redirect/{short_code} and GET /{short_code}."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/redirect/{code}", "/{code}"])
    async def test_redirect_to_original_url(self, client, test_db, path):
        url = await create_test_url(test_db, original_url="https://www.example.com/landing?x=1", user_id=1)
        await test_db.commit()

        response = await client.get(path.format(code=url.short_code))

        assert response.status_code == 302
        assert response.headers["location"] == "https://www.example.com/landing?x=1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/redirect/invalidcode", "/invalidcode"])
    async def test_unknown_short_code(self, client, path):
        response = await client.get(path)

        assert response.status_code == 404
        assert response.json() == {"message": "Short URL not found"}

    @pytest.mark.asyncio
    async def test_redirect_needs_no_authentication(self, client, auth_headers):
        created = await client.post(
            "/api/shorten",
            json={"url": "https://www.example.com/article"},
            headers=auth_headers(1)
        )
        code = created.json()["short_url"].rsplit("/", 1)[-1]

        response = await client.get(f"/{code}")

        assert response.status_code == 302
        assert response.headers["location"] == "https://www.example.com/article"

    @pytest.mark.asyncio
    async def test_request_id_header(self, client):
        response = await client.get("/nothing12", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.api
class TestHealth:
    """Health probes."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["components"]["database"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_live_and_ready(self, client):
        assert (await client.get("/api/health/live")).json() == {"alive": True}
        assert (await client.get("/api/health/ready")).json()["ready"] is True
