"""Database Routes — HTTP status and envelope for every admin outcome.

Invariants:
    - Success bodies: {"databases"}, {"message"}, {"database", "stats"}
    - Each typed error maps to its http_status with the REST error envelope
    - Missing/unknown X-Session-Key → 401 CONNECTION_UNAVAILABLE
"""

from tests.services.fake_storage import SESSION_HEADERS as HEADERS


# ─── list ────────────────────────────────────────────────────────

async def test_list_databases(client, server):
    server.add_database("admin")
    server.add_database("shop")
    res = await client.get("/api/v1/databases", headers=HEADERS)
    assert res.status_code == 200
    assert res.json() == {"databases": ["admin", "shop"]}


async def test_missing_session_header_is_unauthorized(client):
    res = await client.get("/api/v1/databases")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "CONNECTION_UNAVAILABLE"


async def test_unknown_session_is_unauthorized(client):
    res = await client.get(
        "/api/v1/databases", headers={"X-Session-Key": "unknown-token"},
    )
    assert res.status_code == 401


async def test_list_storage_failure_returns_503(client, server):
    server.fail_on("list_database_names")
    res = await client.get("/api/v1/databases", headers=HEADERS)
    assert res.status_code == 503
    body = res.json()["error"]
    assert body["code"] == "GET_DB_LIST_EXCEPTION"
    assert body["category"] == "storage"


# ─── create ──────────────────────────────────────────────────────

async def test_create_database(client, server):
    res = await client.post("/api/v1/databases", json={"name": "shop"}, headers=HEADERS)
    assert res.status_code == 201
    assert res.json() == {"message": "Created DB with name [shop]"}
    assert "shop" in server.databases


async def test_create_duplicate_returns_409(client, server):
    server.add_database("shop")
    res = await client.post("/api/v1/databases", json={"name": "shop"}, headers=HEADERS)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_DATABASE"


async def test_create_empty_name_returns_400(client, server):
    res = await client.post("/api/v1/databases", json={"name": ""}, headers=HEADERS)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "EMPTY_DATABASE_NAME"
    assert "empty" in error["message"].lower()
    assert server.calls == []


async def test_create_missing_name_returns_400(client):
    res = await client.post("/api/v1/databases", json={}, headers=HEADERS)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "EMPTY_DATABASE_NAME"


async def test_create_invalid_body_returns_validation_error(client):
    res = await client.post("/api/v1/databases", json={"name": 12}, headers=HEADERS)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── drop ────────────────────────────────────────────────────────

async def test_drop_database(client, server):
    server.add_database("shop")
    res = await client.delete("/api/v1/databases/shop", headers=HEADERS)
    assert res.status_code == 200
    assert res.json() == {"message": "Deleted DB with name [shop]"}


async def test_drop_undefined_returns_404(client):
    res = await client.delete("/api/v1/databases/ghost", headers=HEADERS)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "UNDEFINED_DATABASE"


async def test_drop_storage_failure_returns_503(client, server):
    server.add_database("shop")
    server.fail_on("drop_database")
    res = await client.delete("/api/v1/databases/shop", headers=HEADERS)
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DB_DELETION_EXCEPTION"


# ─── stats ───────────────────────────────────────────────────────

async def test_get_stats(client, server):
    server.add_database("shop", stats={"ok": 1.0, "db": "shop"})
    res = await client.get("/api/v1/databases/shop/stats", headers=HEADERS)
    assert res.status_code == 200
    assert res.json() == {
        "database": "shop",
        "stats": [
            {"Key": "ok", "Value": "1.0", "Type": "Double"},
            {"Key": "db", "Value": "shop", "Type": "String"},
        ],
    }


async def test_get_stats_undefined_returns_404(client):
    res = await client.get("/api/v1/databases/ghost/stats", headers=HEADERS)
    assert res.status_code == 404


async def test_get_stats_encoding_failure_returns_500(client, server):
    server.add_database("shop", stats={"bad": {(1, 2): "x"}})
    res = await client.get("/api/v1/databases/shop/stats", headers=HEADERS)
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "STATS_ENCODING_ERROR"


async def test_round_trip_over_http(client):
    await client.post("/api/v1/databases", json={"name": "foo"}, headers=HEADERS)
    listed = await client.get("/api/v1/databases", headers=HEADERS)
    assert "foo" in listed.json()["databases"]
    await client.delete("/api/v1/databases/foo", headers=HEADERS)
    listed = await client.get("/api/v1/databases", headers=HEADERS)
    assert "foo" not in listed.json()["databases"]
