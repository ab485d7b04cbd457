import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_cors_options_allowed_origin(client: AsyncClient):
    response = await client.options(
        "/todos",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type,X-API-Key",
        },
    )
    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"
    allow_methods = response.headers.get("access-control-allow-methods", "")
    assert "POST" in allow_methods and "DELETE" in allow_methods
    allow_headers = response.headers.get("access-control-allow-headers", "").lower()
    assert "content-type" in allow_headers and "x-api-key" in allow_headers


@pytest.mark.asyncio
async def test_cors_unknown_origin_rejected(client: AsyncClient):
    response = await client.options(
        "/todos",
        headers={
            "Origin": "http://evil.example",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers
