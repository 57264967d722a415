"""End-to-end HTTP tests for the /api routes.

Learn: These go through the real auth pipeline: register, take the token
from the response, send it back as ``Authorization: Bearer <token>``.
"""

import uuid
from datetime import datetime

import pytest

from skillswap.auth.jwt import issue_token


def _is_iso_utc(value: str) -> bool:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed.utcoffset() is not None and parsed.utcoffset().total_seconds() == 0


# ═══════════════════════════════════════════════════════════
# Register / login / me
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_returns_token_and_sanitized_user(client):
    r = await client.post(
        "/api/register",
        json={"email": "New@Example.com", "password": "pw_123456", "name": "New"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["token"]
    user = body["user"]
    assert user["email"] == "New@Example.com"
    assert user["name"] == "New"
    assert user["profile"] == {
        "bio": "",
        "skillsOffering": "",
        "skillsSeeking": "",
        "availability": "",
    }
    assert "passwordHash" not in user
    assert "emailLower" not in user
    assert _is_iso_utc(user["createdAt"])
    uuid.UUID(user["id"])


@pytest.mark.asyncio
async def test_register_missing_field(client):
    r = await client.post("/api/register", json={"email": "x@example.com", "password": "pw"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Email, password and name are required"


@pytest.mark.asyncio
async def test_register_duplicate_email_any_case(client, signup):
    await signup("Dup", email="dup@example.com")
    r = await client.post(
        "/api/register",
        json={"email": "DUP@example.com", "password": "pw_123456", "name": "Dup 2"},
    )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_register_malformed_body_is_400(client):
    r = await client.post(
        "/api/register",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_login(client, signup):
    _, user, _ = await signup("Login", email="Login@Example.com", password="my_password")
    r = await client.post(
        "/api/login", json={"email": "login@example.com", "password": "my_password"}
    )
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user["id"]
    assert r.json()["token"]


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client, signup):
    await signup("Real", email="real@example.com", password="right_password")

    wrong_pw = await client.post(
        "/api/login", json={"email": "real@example.com", "password": "wrong_password"}
    )
    unknown = await client.post(
        "/api/login", json={"email": "ghost@example.com", "password": "right_password"}
    )
    assert wrong_pw.status_code == unknown.status_code == 401
    assert wrong_pw.json() == unknown.json() == {"detail": "Invalid credentials"}


@pytest.mark.asyncio
async def test_login_missing_field(client):
    r = await client.post("/api/login", json={"email": "a@example.com"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_me(client, signup):
    _, user, headers = await signup("Me")
    r = await client.get("/api/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["user"] == user


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path,method",
    [
        ("/api/me", "GET"),
        ("/api/profile", "POST"),
        ("/api/users", "GET"),
        ("/api/requests", "GET"),
        ("/api/requests", "POST"),
        (f"/api/requests/{uuid.uuid4()}/status", "POST"),
        (f"/api/requests/{uuid.uuid4()}/messages", "GET"),
        (f"/api/requests/{uuid.uuid4()}/messages", "POST"),
    ],
)
async def test_protected_routes_require_token(client, path, method):
    r = await client.request(method, path, json={})
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_bad_and_orphaned_tokens_get_same_response(client):
    garbage = await client.get("/api/me", headers={"Authorization": "Bearer nope"})
    orphan = await client.get(
        "/api/me",
        headers={"Authorization": f"Bearer {issue_token(str(uuid.uuid4()))}"},
    )
    assert garbage.status_code == orphan.status_code == 401
    assert garbage.json() == orphan.json() == {"detail": "Invalid or expired token"}


# ═══════════════════════════════════════════════════════════
# Profile / directory
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_update_profile(client, signup):
    _, _, headers = await signup("Prof")
    r = await client.post(
        "/api/profile",
        headers=headers,
        json={"bio": "hi", "skillsOffering": "cooking", "availability": "evenings"},
    )
    assert r.status_code == 200
    assert r.json()["user"]["profile"] == {
        "bio": "hi",
        "skillsOffering": "cooking",
        "skillsSeeking": "",
        "availability": "evenings",
    }

    r = await client.put("/api/profile", headers=headers, json={"skillsSeeking": "welding"})
    assert r.json()["user"]["profile"] == {
        "bio": "",
        "skillsOffering": "",
        "skillsSeeking": "welding",
        "availability": "",
    }


@pytest.mark.asyncio
async def test_list_users_excludes_self(client, signup):
    _, me, headers = await signup("Me")
    _, other1, _ = await signup("Other1")
    _, other2, _ = await signup("Other2")

    r = await client.get("/api/users", headers=headers)
    assert r.status_code == 200
    ids = {u["id"] for u in r.json()["users"]}
    assert ids == {other1["id"], other2["id"]}
    assert all("passwordHash" not in u for u in r.json()["users"])


# ═══════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_request_errors(client, signup):
    _, me, headers = await signup("Sender")

    r = await client.post("/api/requests", headers=headers, json={})
    assert r.status_code == 400

    r = await client.post("/api/requests", headers=headers, json={"toUserId": "zzz"})
    assert r.status_code == 400

    r = await client.post(
        "/api/requests", headers=headers, json={"toUserId": str(uuid.uuid4())}
    )
    assert r.status_code == 404

    r = await client.post("/api/requests", headers=headers, json={"toUserId": me["id"]})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_status_update_rules(client, signup):
    _, _, sender = await signup("Sender")
    _, recipient_user, recipient = await signup("Recipient")
    _, _, outsider = await signup("Outsider")

    r = await client.post(
        "/api/requests", headers=sender, json={"toUserId": recipient_user["id"]}
    )
    request_id = r.json()["request"]["id"]
    path = f"/api/requests/{request_id}/status"

    assert (await client.post(path, headers=sender, json={"status": "accepted"})).status_code == 403
    assert (await client.post(path, headers=outsider, json={"status": "accepted"})).status_code == 403
    assert (await client.post(path, headers=recipient, json={"status": "maybe"})).status_code == 400
    assert (
        await client.post(
            f"/api/requests/{uuid.uuid4()}/status", headers=recipient, json={"status": "accepted"}
        )
    ).status_code == 404
    assert (
        await client.post("/api/requests/bogus/status", headers=recipient, json={"status": "accepted"})
    ).status_code == 404

    for status in ["completed", "pending", "rejected", "accepted"]:
        r = await client.post(path, headers=recipient, json={"status": status})
        assert r.status_code == 200
        assert r.json()["request"]["status"] == status


@pytest.mark.asyncio
async def test_list_requests_only_mine(client, signup):
    _, a, a_headers = await signup("A")
    _, b, b_headers = await signup("B")
    _, c, c_headers = await signup("C")

    await client.post("/api/requests", headers=a_headers, json={"toUserId": b["id"]})
    await client.post("/api/requests", headers=c_headers, json={"toUserId": b["id"]})

    r = await client.get("/api/requests", headers=a_headers)
    [only] = r.json()["requests"]
    assert only["fromUserId"] == a["id"]
    assert only["fromUser"]["name"] == "A"
    assert only["toUser"]["name"] == "B"

    r = await client.get("/api/requests", headers=b_headers)
    assert len(r.json()["requests"]) == 2


@pytest.mark.asyncio
async def test_messages_forbidden_for_outsider(client, signup):
    _, _, a_headers = await signup("A")
    _, b, _ = await signup("B")
    _, _, c_headers = await signup("C")

    r = await client.post("/api/requests", headers=a_headers, json={"toUserId": b["id"]})
    path = f"/api/requests/{r.json()['request']['id']}/messages"

    assert (await client.get(path, headers=c_headers)).status_code == 403
    assert (await client.post(path, headers=c_headers, json={"text": "hi"})).status_code == 403
    assert (await client.post(path, headers=a_headers, json={"text": ""})).status_code == 400
    assert (
        await client.get(f"/api/requests/{uuid.uuid4()}/messages", headers=a_headers)
    ).status_code == 404


# ═══════════════════════════════════════════════════════════
# Full swap flow
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_alice_and_bob_swap_flow(client, signup):
    _, alice, alice_headers = await signup("Alice")
    _, bob, bob_headers = await signup("Bob")

    # Alice asks Bob for a swap
    r = await client.post(
        "/api/requests",
        headers=alice_headers,
        json={"toUserId": bob["id"], "message": "swap guitar for piano"},
    )
    assert r.status_code == 201
    request = r.json()["request"]
    assert request["status"] == "pending"
    assert request["message"] == "swap guitar for piano"
    assert request["fromUserId"] == alice["id"]
    assert request["toUserId"] == bob["id"]
    assert _is_iso_utc(request["createdAt"])

    # Bob accepts
    r = await client.post(
        f"/api/requests/{request['id']}/status",
        headers=bob_headers,
        json={"status": "accepted"},
    )
    assert r.status_code == 200
    assert r.json()["request"]["status"] == "accepted"

    # Alice follows up
    r = await client.post(
        f"/api/requests/{request['id']}/messages",
        headers=alice_headers,
        json={"text": "great, let's schedule"},
    )
    assert r.status_code == 201
    assert r.json()["message"]["sender"]["id"] == alice["id"]

    # Bob reads the thread
    r = await client.get(f"/api/requests/{request['id']}/messages", headers=bob_headers)
    assert r.status_code == 200
    [message] = r.json()["messages"]
    assert message["text"] == "great, let's schedule"
    assert message["senderId"] == alice["id"]
    assert message["requestId"] == request["id"]
    assert message["sender"]["name"] == "Alice"
    assert "passwordHash" not in message["sender"]
    assert "emailLower" not in message["sender"]
    assert _is_iso_utc(message["createdAt"])


@pytest.mark.asyncio
async def test_register_long_name_is_accepted(client):
    r = await client.post(
        "/api/register",
        json={"email": "long@example.com", "password": "pw_123456", "name": "N" * 300},
    )
    assert r.status_code == 201
    assert r.json()["user"]["name"] == "N" * 300
