import pytest


@pytest.mark.asyncio
async def test_schedule_empty(client):
    r = await client.get("/todos/schedule")
    assert r.status_code == 200
    assert r.json() == {"earliestStart": {}, "criticalPath": [], "length": None}


@pytest.mark.asyncio
async def test_schedule_after_rejected_cycle(client, create_todo, set_deps):
    t1 = await create_todo("one")
    t2 = await create_todo("two")
    t3 = await create_todo("three")
    assert (await set_deps(t2, [t1])).status_code == 200
    assert (await set_deps(t1, [t2])).status_code == 409

    r = await client.get("/todos/schedule")
    assert r.status_code == 200
    body = r.json()
    assert body["earliestStart"] == {str(t1): 0, str(t2): 1, str(t3): 0}
    assert body["criticalPath"] == [t2]
    assert body["length"] == 1


@pytest.mark.asyncio
async def test_schedule_diamond(client, create_todo, set_deps):
    a = await create_todo("A")
    b = await create_todo("B")
    c = await create_todo("C")
    d = await create_todo("D")
    assert (await set_deps(b, [a])).status_code == 200
    assert (await set_deps(c, [a])).status_code == 200
    assert (await set_deps(d, [b, c])).status_code == 200

    body = (await client.get("/todos/schedule")).json()
    assert body["earliestStart"] == {str(a): 0, str(b): 1, str(c): 1, str(d): 2}
    assert body["criticalPath"] == [d]


@pytest.mark.asyncio
async def test_graph_view(client, create_todo, set_deps):
    a = await create_todo("A")
    b = await create_todo("B")
    c = await create_todo("C")
    assert (await set_deps(c, [a, b])).status_code == 200

    r = await client.get("/todos/graph")
    assert r.status_code == 200
    body = r.json()
    assert [n["id"] for n in body["nodes"]] == [a, b, c]
    nodes = {n["id"]: n for n in body["nodes"]}
    assert nodes[c] == {"id": c, "title": "C", "earliestStart": 1, "critical": True}
    assert nodes[a]["critical"] is False
    assert body["links"] == [{"source": a, "target": c}, {"source": b, "target": c}]
