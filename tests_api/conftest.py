# tests_api/conftest.py
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# --- importe l'app et les deps ---
from api.fastapi_app.app import app
from api.fastapi_app import deps as api_deps

API_KEY = "test-key"


# ---------- Engine & Session de test (SQLite fichier) ----------
# NB: on évite sqlite in-memory (connexions multiples) ; un fichier par test
@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test_api.db'}", echo=False)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def testing_sessionmaker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def _install_overrides(testing_sessionmaker):
    async def _override_get_db():
        async with testing_sessionmaker() as session:
            try:
                yield session
            finally:
                # rollback de sécurité si une requête a laissé une transaction ouverte
                await session.rollback()

    api_deps.settings.api_key = API_KEY
    app.dependency_overrides[api_deps.get_session] = _override_get_db
    app.dependency_overrides[api_deps.get_sessionmaker] = lambda: testing_sessionmaker


@pytest_asyncio.fixture
async def client(testing_sessionmaker) -> AsyncClient:
    """
    Client httpx avec:
      - base SQLite de test via override get_session / get_sessionmaker
      - en-tête X-API-Key valide
      - lifespan de l'app (schéma + chargement du graphe)
    """
    _install_overrides(testing_sessionmaker)
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(
                transport=transport,
                base_url="http://test",
                headers={"X-API-Key": API_KEY},
            ) as ac:
                yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_noauth(testing_sessionmaker) -> AsyncClient:
    """Client httpx sans clé API pour tester les 401."""
    _install_overrides(testing_sessionmaker)
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
    finally:
        app.dependency_overrides.clear()


# ---------- Données seed ----------
@pytest.fixture
def create_todo(client):
    async def _create(title: str, **extra) -> int:
        r = await client.post("/todos", json={"title": title, **extra})
        assert r.status_code == 201, r.text
        return r.json()["id"]

    return _create


@pytest.fixture
def set_deps(client):
    async def _set(todo_id: int, depends_on_ids):
        return await client.post(
            "/todos/dependencies",
            json={"todoId": todo_id, "dependsOnIds": list(depends_on_ids)},
        )

    return _set
