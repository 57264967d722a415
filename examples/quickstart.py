#!/usr/bin/env python3
"""
Skill Swap Quickstart — the whole swap flow in one script.

Registers two users → sends a swap request → recipient accepts →
they exchange messages → each side reads the thread.
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: skillswap serve (http://localhost:4000)
"""

import sys
import uuid

import httpx

BASE = "http://localhost:4000/api"


def register(client: httpx.Client, name: str, run_id: str) -> tuple[dict, dict]:
    """Register a user; return (user, auth headers)."""
    resp = client.post(
        "/register",
        json={
            "email": f"{name.lower()}-{run_id}@example.com",
            "password": "demo-password-123",
            "name": name,
        },
    )
    assert resp.status_code == 201, f"Failed: {resp.text}"
    body = resp.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


def main():
    run_id = uuid.uuid4().hex[:6]
    client = httpx.Client(base_url=BASE, timeout=10)

    # ── Health check ──────────────────────────────────────────────
    print("Checking backend health...")
    try:
        resp = client.get("/health")
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}")
        sys.exit(1)
    health = resp.json()
    print(f"  Storage: {health['backend']} ({health['storage']})")

    # ── Users ─────────────────────────────────────────────────────
    print("\n1. Registering Alice and Bob...")
    alice, alice_h = register(client, "Alice", run_id)
    bob, bob_h = register(client, "Bob", run_id)
    client.post(
        "/profile",
        headers=alice_h,
        json={"skillsOffering": "guitar", "skillsSeeking": "piano"},
    )
    print(f"   Alice: {alice['id'][:8]}...  Bob: {bob['id'][:8]}...")

    # ── Request ───────────────────────────────────────────────────
    print("\n2. Alice sends Bob a swap request...")
    resp = client.post(
        "/requests",
        headers=alice_h,
        json={"toUserId": bob["id"], "message": "swap guitar for piano"},
    )
    assert resp.status_code == 201, f"Failed: {resp.text}"
    request = resp.json()["request"]
    print(f"   Request {request['id'][:8]}... status={request['status']}")

    # ── Only the recipient may respond ────────────────────────────
    resp = client.post(
        f"/requests/{request['id']}/status", headers=alice_h, json={"status": "accepted"}
    )
    print(f"\n3. Alice tries to accept her own request → {resp.status_code}")

    resp = client.post(
        f"/requests/{request['id']}/status", headers=bob_h, json={"status": "accepted"}
    )
    print(f"   Bob accepts → {resp.json()['request']['status']}")

    # ── Conversation ──────────────────────────────────────────────
    print("\n4. Chatting...")
    client.post(
        f"/requests/{request['id']}/messages",
        headers=alice_h,
        json={"text": "great, let's schedule"},
    )
    client.post(
        f"/requests/{request['id']}/messages",
        headers=bob_h,
        json={"text": "Saturday at 10?"},
    )
    resp = client.get(f"/requests/{request['id']}/messages", headers=bob_h)
    for message in resp.json()["messages"]:
        print(f"   {message['sender']['name']}: {message['text']}")

    print("\nDone.")


if __name__ == "__main__":
    main()
