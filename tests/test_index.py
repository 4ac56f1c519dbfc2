import pytest
from httpx import ASGITransport, AsyncClient

from waitlist.core.config import Settings
from waitlist.main import create_app


@pytest.mark.asyncio
async def test_index_serves_form(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "signup" in r.text


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["POST", "HEAD", "DELETE", "TRACE", "PROPFIND"])
async def test_index_rejects_other_methods(client, method):
    r = await client.request(method, "/")
    assert r.status_code == 405
    assert r.headers["allow"] == "GET"


@pytest.mark.asyncio
async def test_index_method_not_allowed_message(client):
    r = await client.request("TRACE", "/", headers={"Content-Type": "application/json"})
    assert r.status_code == 405
    assert r.json() == {"message": "method not allowed"}


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/index.html", "/api/v1", "/docs", "/openapi.json"])
async def test_unknown_paths_not_found(client, path):
    r = await client.get(path)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_missing_form_file_not_found(tmp_path):
    app = create_app(str(tmp_path / "w.db"), Settings(_env_file=None, INDEX_FILE=str(tmp_path / "nope.html")))
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            r = await ac.get("/")
        assert r.status_code == 404
    finally:
        app.state.engine.dispose()
