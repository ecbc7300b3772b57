"""
Regression tests for boundary behaviour.

1. Validation failures return 400 with one message per field (not 422)
2. Passwords are never echoed back
3. Store outages map to 503, not 500
4. X-Query-Count header reports the statements actually executed
5. CORS must not set allow_credentials=true with allow_origins=*
6. Health / welcome / metrics endpoints
"""
import pytest
from httpx import AsyncClient

from app.dependencies import get_question_service
from app.exceptions import StoreUnavailable
from app.main import app


# ---------------------------------------------------------------------------
# 1. Validation -> 400 field map
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_validation_error_is_field_map(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/users", json={
        "name": "", "password": "", "email": "nope",
    })
    assert resp.status_code == 400
    assert set(resp.json()) == {"name", "password", "email"}


@pytest.mark.asyncio
async def test_non_integer_path_id_is_400(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/questions/abc")
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# 2. Password never returned
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_password_not_in_any_user_response(async_client: AsyncClient):
    created = await async_client.post("/api/v1/users", json={
        "name": "private", "password": "hunter2", "email": "private@example.com",
    })
    user_id = created.json()["id"]
    responses = [
        created,
        await async_client.get(f"/api/v1/users/{user_id}"),
        await async_client.get("/api/v1/users"),
        await async_client.put(f"/api/v1/users/{user_id}", json={
            "name": "private", "password": "hunter3", "email": "private@example.com",
        }),
    ]
    for resp in responses:
        assert resp.status_code in (200, 201)
        assert "password" not in resp.text
        assert "hunter" not in resp.text


# ---------------------------------------------------------------------------
# 3. Store outage -> 503
# ---------------------------------------------------------------------------

class _UnreachableQuestions:
    async def list(self):
        raise StoreUnavailable("connection refused")


@pytest.mark.asyncio
async def test_store_unavailable_returns_503(async_client: AsyncClient):
    app.dependency_overrides[get_question_service] = lambda: _UnreachableQuestions()
    try:
        resp = await async_client.get("/api/v1/questions")
    finally:
        del app.dependency_overrides[get_question_service]
    assert resp.status_code == 503
    assert resp.json() == {"message": "connection refused"}


# ---------------------------------------------------------------------------
# 4. X-Query-Count
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_query_count_headers_present(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/users")
    assert resp.status_code == 200
    assert int(resp.headers["x-query-count"]) >= 1
    assert float(resp.headers["x-response-time-ms"]) >= 0


@pytest.mark.asyncio
async def test_missing_delete_stops_after_existence_check(async_client: AsyncClient):
    """Deleting a missing id issues no more SQL than reading it."""
    get_resp = await async_client.get("/api/v1/users/99999")
    delete_resp = await async_client.delete("/api/v1/users/99999")
    assert delete_resp.status_code == 404
    assert delete_resp.headers["x-query-count"] == get_resp.headers["x-query-count"]


@pytest.mark.asyncio
async def test_create_counts_more_queries_than_read(async_client: AsyncClient):
    """Create reads the sequence, consumes it and inserts."""
    get_resp = await async_client.get("/api/v1/users/99999")
    create_resp = await async_client.post("/api/v1/users", json={
        "name": "counted", "password": "pw", "email": "counted@example.com",
    })
    assert create_resp.status_code == 201
    assert int(create_resp.headers["x-query-count"]) > int(get_resp.headers["x-query-count"])


# ---------------------------------------------------------------------------
# 5. CORS headers
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_cors_no_credentials_with_wildcard_origin(async_client: AsyncClient):
    resp = await async_client.options(
        "/api/v1/questions",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "GET",
        },
    )
    cred_header = resp.headers.get("access-control-allow-credentials", "").lower()
    assert cred_header != "true"


# ---------------------------------------------------------------------------
# 6. Health / welcome / metrics
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_welcome(async_client: AsyncClient):
    resp = await async_client.get("/welcome")
    assert resp.status_code == 200
    assert "Welcome" in resp.json()["message"]


@pytest.mark.asyncio
async def test_metrics_empty(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/metrics")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_users"] == 0
    assert data["total_questions"] == 0
    assert data["total_answers"] == 0
    assert data["sequences"] == {"users_seq": 0, "questions_seq": 0, "answers_seq": 0}
    assert set(data["compensation"]) == {"resets", "failures"}


@pytest.mark.asyncio
async def test_metrics_counts(async_client: AsyncClient):
    user_id = (await async_client.post("/api/v1/users", json={
        "name": "metricuser", "password": "pw", "email": "metricuser@example.com",
    })).json()["id"]
    for i in range(2):
        await async_client.post("/api/v1/questions", json={"question": f"M{i}", "user_id": user_id})

    data = (await async_client.get("/api/v1/metrics")).json()
    assert data["total_users"] == 1
    assert data["total_questions"] == 2
    assert data["sequences"]["users_seq"] == 1
    assert data["sequences"]["questions_seq"] == 2
