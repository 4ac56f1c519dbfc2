import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from waitlist.core.config import Settings
from waitlist.main import create_app


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "waitlist.db")


@pytest.fixture
def index_file(tmp_path):
    path = tmp_path / "index.html"
    path.write_text("<form method=\"post\" action=\"/api/v1/waitlist\">signup</form>")
    return path


@pytest.fixture
def app(db_path, index_file):
    application = create_app(db_path, Settings(_env_file=None, INDEX_FILE=str(index_file)))
    yield application
    application.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def db_session(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
