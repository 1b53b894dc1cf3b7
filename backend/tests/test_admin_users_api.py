"""Admin user management."""


async def test_admin_routes_reject_standard_users(client, alice):
    _, headers = alice
    response = await client.get("/admin/users", headers=headers)
    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden: Admin access required"


async def test_list_users_with_transaction_counts(client, admin, alice, bob, payload):
    _, admin_headers = admin
    alice_user, alice_headers = alice
    bob_user, _ = bob
    for _ in range(2):
        assert (await client.post("/transactions", json=payload(), headers=alice_headers)).status_code == 201

    response = await client.get("/admin/users", headers=admin_headers)
    assert response.status_code == 200
    counts = {u["email"]: u["transaction_count"] for u in response.json()}
    assert counts == {"admin@example.com": 0, "alice@example.com": 2, "bob@example.com": 0}


async def test_create_user_with_role(client, admin):
    _, admin_headers = admin
    response = await client.post(
        "/admin/users",
        json={"name": "Clerk", "email": "clerk@example.com", "password": "password123", "role": "admin"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    assert response.json()["role"] == "admin"

    response = await client.post("/auth/login", json={"email": "clerk@example.com", "password": "password123"})
    assert response.json()["user"]["role"] == "admin"


async def test_create_user_rejects_bad_role_and_duplicates(client, admin, alice):
    _, admin_headers = admin
    response = await client.post(
        "/admin/users",
        json={"name": "X", "email": "x@example.com", "password": "password123", "role": "owner"},
        headers=admin_headers,
    )
    assert response.status_code == 400

    response = await client.post(
        "/admin/users",
        json={"name": "X", "email": "alice@example.com", "password": "password123"},
        headers=admin_headers,
    )
    assert response.status_code == 409


async def test_update_user(client, admin, alice, bob):
    _, admin_headers = admin
    alice_user, _ = alice

    response = await client.put(f"/admin/users/{alice_user.id}", json={"role": "admin", "name": "Alice A."}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    assert response.json()["name"] == "Alice A."
    assert response.json()["email"] == "alice@example.com"

    response = await client.put(f"/admin/users/{alice_user.id}", json={"email": "bob@example.com"}, headers=admin_headers)
    assert response.status_code == 409

    response = await client.put("/admin/users/99999", json={"name": "Nobody"}, headers=admin_headers)
    assert response.status_code == 404


async def test_promoted_user_sees_all_transactions(client, admin, alice, bob, payload):
    _, admin_headers = admin
    alice_user, alice_headers = alice
    _, bob_headers = bob
    await client.post("/transactions", json=payload(), headers=bob_headers)

    assert (await client.get("/transactions", headers=alice_headers)).json()["pagination"]["total"] == 0
    await client.put(f"/admin/users/{alice_user.id}", json={"role": "admin"}, headers=admin_headers)
    assert (await client.get("/transactions", headers=alice_headers)).json()["pagination"]["total"] == 1


async def test_delete_user_only_without_transactions(client, admin, alice, bob, payload):
    _, admin_headers = admin
    alice_user, alice_headers = alice
    bob_user, _ = bob
    await client.post("/transactions", json=payload(), headers=alice_headers)

    response = await client.delete(f"/admin/users/{alice_user.id}", headers=admin_headers)
    assert response.status_code == 409

    response = await client.delete(f"/admin/users/{bob_user.id}", headers=admin_headers)
    assert response.status_code == 204

    response = await client.delete(f"/admin/users/{bob_user.id}", headers=admin_headers)
    assert response.status_code == 404
