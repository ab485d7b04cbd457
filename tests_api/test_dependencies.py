import pytest

CYCLE_MESSAGE = "Adding these dependencies creates a circular dependency"


@pytest.mark.asyncio
async def test_update_then_reverse_is_rejected(client, create_todo, set_deps):
    t1 = await create_todo("one")
    t2 = await create_todo("two")

    r = await set_deps(t2, [t1])
    assert r.status_code == 200
    assert r.json() == {"message": "Dependencies updated", "todoId": t2, "dependsOnIds": [t1]}

    r = await set_deps(t1, [t2])
    assert r.status_code == 409
    body = r.json()
    assert body["code"] == "circular_dependency"
    assert body["detail"] == CYCLE_MESSAGE
    assert body["hint"] == f"{t1} -> {t2} -> {t1}"

    # rien n'a été écrit pour t1
    r = await client.get(f"/todos/{t1}")
    assert r.json()["dependencies"] == []
    edges = (await client.get("/todos/dependencies")).json()
    assert edges == [{"todoId": t2, "dependsOnId": t1}]


@pytest.mark.asyncio
async def test_self_reference_rejected(client, create_todo, set_deps):
    t1 = await create_todo("one")
    r = await set_deps(t1, [t1])
    assert r.status_code == 409
    assert r.json()["code"] == "circular_dependency"


@pytest.mark.asyncio
async def test_transitive_cycle_rejected(client, create_todo, set_deps):
    a = await create_todo("a")
    b = await create_todo("b")
    c = await create_todo("c")
    assert (await set_deps(b, [a])).status_code == 200
    assert (await set_deps(c, [b])).status_code == 200

    r = await set_deps(a, [c])
    assert r.status_code == 409
    assert r.json()["hint"] == f"{a} -> {c} -> {b} -> {a}"


@pytest.mark.asyncio
async def test_replace_and_clear(client, create_todo, set_deps):
    a = await create_todo("a")
    b = await create_todo("b")
    c = await create_todo("c")
    assert (await set_deps(c, [a, b, a])).status_code == 200
    edges = (await client.get("/todos/dependencies")).json()
    assert edges == [{"todoId": c, "dependsOnId": a}, {"todoId": c, "dependsOnId": b}]

    r = await set_deps(c, [b])
    assert r.json()["dependsOnIds"] == [b]

    r = await set_deps(c, [])
    assert r.status_code == 200
    assert (await client.get("/todos/dependencies")).json() == []


@pytest.mark.asyncio
async def test_unknown_ids_rejected(client, create_todo, set_deps):
    a = await create_todo("a")

    r = await set_deps(a, [999])
    assert r.status_code == 400
    assert r.json()["code"] == "validation_error"

    r = await set_deps(999, [a])
    assert r.status_code == 400
    assert (await client.get("/todos/dependencies")).json() == []


@pytest.mark.asyncio
async def test_malformed_body_422(client, create_todo):
    a = await create_todo("a")

    r = await client.post("/todos/dependencies", json={"todoId": a})
    assert r.status_code == 422
    r = await client.post("/todos/dependencies", json={"todoId": "x", "dependsOnIds": []})
    assert r.status_code == 422
    r = await client.post("/todos/dependencies", json={"todoId": a, "dependsOnIds": "1"})
    assert r.status_code == 422
    r = await client.post("/todos/dependencies", json={"todoId": a, "dependsOnIds": ["1"]})
    assert r.status_code == 422
    assert r.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_graph_survives_restart(client, create_todo, set_deps):
    from asgi_lifespan import LifespanManager
    from api.fastapi_app.app import app

    a = await create_todo("a")
    b = await create_todo("b")
    assert (await set_deps(b, [a])).status_code == 200

    # un second démarrage recharge le graphe depuis la table
    async with LifespanManager(app):
        assert app.state.dependency_service.edges() == [(b, a)]
    r = await set_deps(a, [b])
    assert r.status_code == 409
