"""Error Dispatcher and probes: unmatched routes, malformed input, health."""

from fastapi import status


async def test_unknown_route_is_400_route_not_found(client):
    res = await client.get("/v1/nowhere")
    assert res.status_code == 400
    assert res.json() == {
        "status": False,
        "errors": [{"message": "Route not found", "code": "RESOURCE_NOT_FOUND"}],
    }


async def test_unsupported_method_is_bare_message(client):
    res = await client.put("/v1/role")
    assert res.status_code == 400
    body = res.json()
    assert body["status"] is False
    assert body["message"]


async def test_malformed_json_body_is_treated_as_empty(client):
    res = await client.post(
        "/v1/role", content=b"{not json", headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["param"] == "name"


async def test_array_body_is_treated_as_empty(client):
    res = await client.post("/v1/role", json=["name"])
    assert res.json()["errors"][0]["param"] == "name"


async def test_liveness(client):
    res = await client.get("/v1/health/")
    assert res.status_code == status.HTTP_200_OK
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/v1/health/ready")
    assert res.status_code == status.HTTP_200_OK
    assert res.json() == {"status": "ready", "checks": {"database": "healthy"}}


async def test_unexpected_exception_is_400_with_bare_message(unguarded_client):
    """A numeric password passes validation and fails inside hashing."""
    res = await unguarded_client.post(
        "/v1/auth/signup",
        json={"name": "Ada", "email": "ada@mail.com", "password": 12345},
    )
    assert res.status_code == 400
    body = res.json()
    assert body["status"] is False
    assert "errors" not in body
    assert body["message"]
