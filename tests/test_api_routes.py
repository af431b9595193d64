"""End-to-end tests for the auth and transaction endpoints."""

from __future__ import annotations

import pytest


def test_register_login_crud_scenario(client, transaction_payload):
    response = client.post("/api/auth/register", json={"username": "alice", "password": "secret123"})
    assert response.status_code == 201

    response = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
    assert response.status_code == 200
    headers = {"Authorization": f"Bearer {response.get_json()['token']}"}

    payload = transaction_payload()
    response = client.post("/api/transactions", json=payload, headers=headers)
    assert response.status_code == 201
    created = response.get_json()
    for key, value in payload.items():
        assert created[key] == value
    tx_id = created["id"]

    listed = client.get("/api/transactions", headers=headers).get_json()
    assert [row["id"] for row in listed] == [tx_id]

    response = client.put(
        f"/api/transactions/{tx_id}", json=transaction_payload(amount=1200), headers=headers
    )
    assert response.status_code == 200
    assert response.get_json()["amount"] == 1200
    assert response.get_json()["id"] == tx_id

    response = client.delete(f"/api/transactions/{tx_id}", headers=headers)
    assert response.status_code == 200
    assert "message" in response.get_json()

    assert client.get("/api/transactions", headers=headers).get_json() == []


def test_listing_round_trips_created_fields(client, auth_headers, transaction_payload):
    headers = auth_headers()
    payload = transaction_payload(category=None, type="Gasto", amount=12.34)

    created = client.post("/api/transactions", json=payload, headers=headers).get_json()
    listed = client.get("/api/transactions", headers=headers).get_json()[0]

    assert listed == created
    assert {k: listed[k] for k in payload} == payload


def test_register_validation_and_conflict(client):
    assert client.post("/api/auth/register", json={"username": "alice"}).status_code == 400
    assert client.post("/api/auth/register", json={}).status_code == 400

    ok = client.post("/api/auth/register", json={"username": "alice", "password": "pw"})
    dup = client.post("/api/auth/register", json={"username": "alice", "password": "pw2"})

    assert ok.status_code == 201
    assert dup.status_code == 409
    assert dup.get_json()["message"]


def test_login_failures_are_indistinguishable(client):
    client.post("/api/auth/register", json={"username": "alice", "password": "secret123"})

    wrong = client.post("/api/auth/login", json={"username": "alice", "password": "bad"})
    unknown = client.post("/api/auth/login", json={"username": "ghost", "password": "secret123"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json()


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/api/transactions"),
        ("POST", "/api/transactions"),
        ("PUT", "/api/transactions/1"),
        ("DELETE", "/api/transactions/1"),
        ("GET", "/api/transactions/export/csv"),
        ("GET", "/api/transactions/export/pdf"),
    ],
)
def test_missing_token_is_401_and_bad_token_is_403(client, method, path):
    assert client.open(path, method=method).status_code == 401

    bad = client.open(path, method=method, headers={"Authorization": "Bearer not.a.token"})
    assert bad.status_code == 403

    no_scheme = client.open(path, method=method, headers={"Authorization": "garbage"})
    assert no_scheme.status_code == 403


def test_other_users_transactions_are_invisible(client, auth_headers, transaction_payload):
    alice = auth_headers("alice", "secret123")
    bob = auth_headers("bob", "hunter22")
    tx_id = client.post("/api/transactions", json=transaction_payload(), headers=alice).get_json()["id"]

    assert client.get("/api/transactions", headers=bob).get_json() == []
    assert client.put(f"/api/transactions/{tx_id}", json=transaction_payload(), headers=bob).status_code == 404
    assert client.delete(f"/api/transactions/{tx_id}", headers=bob).status_code == 404
    assert client.get("/api/transactions/export/csv", headers=bob).status_code == 404

    assert client.get("/api/transactions", headers=alice).get_json()[0]["amount"] == 1000


@pytest.mark.parametrize("missing", ["type", "date", "description", "amount", "account"])
def test_update_requires_fields(client, auth_headers, transaction_payload, missing):
    headers = auth_headers()
    tx_id = client.post("/api/transactions", json=transaction_payload(), headers=headers).get_json()["id"]
    body = transaction_payload()
    body.pop(missing)

    response = client.put(f"/api/transactions/{tx_id}", json=body, headers=headers)

    assert response.status_code == 400
    assert missing in response.get_json()["message"]


def test_update_allows_missing_category(client, auth_headers, transaction_payload):
    headers = auth_headers()
    tx_id = client.post("/api/transactions", json=transaction_payload(), headers=headers).get_json()["id"]
    body = transaction_payload()
    body.pop("category")

    response = client.put(f"/api/transactions/{tx_id}", json=body, headers=headers)

    assert response.status_code == 200
    assert response.get_json()["category"] is None


def test_update_unknown_id_is_404(client, auth_headers, transaction_payload):
    response = client.put("/api/transactions/4242", json=transaction_payload(), headers=auth_headers())
    assert response.status_code == 404


@pytest.mark.parametrize(
    "overrides",
    [
        {"type": "Transferencia"},
        {"date": "05/01/2024"},
        {"amount": "abc"},
        {"amount": -5},
        {"amount": 1e30},
        {"amount": "1e30"},
        {"amount": "99999999999999999999999999999"},
        {"amount": 10_000_000_000},
        {"account": "a" * 65},
        {"category": "c" * 65},
    ],
)
def test_create_rejects_malformed_values(client, auth_headers, transaction_payload, overrides):
    response = client.post("/api/transactions", json=transaction_payload(**overrides), headers=auth_headers())
    assert response.status_code == 400
    assert response.get_json()["message"]


def test_update_rejects_out_of_range_amount(client, auth_headers, transaction_payload):
    headers = auth_headers()
    tx_id = client.post("/api/transactions", json=transaction_payload(), headers=headers).get_json()["id"]

    response = client.put(f"/api/transactions/{tx_id}", json=transaction_payload(amount="1e30"), headers=headers)

    assert response.status_code == 400
    assert "amount" in response.get_json()["message"]


def test_largest_storable_amount_is_accepted(client, auth_headers, transaction_payload):
    response = client.post(
        "/api/transactions", json=transaction_payload(amount="9999999999.99"), headers=auth_headers()
    )

    assert response.status_code == 201
    assert response.get_json()["amount"] == 9999999999.99


def test_delete_twice_yields_success_then_404(client, auth_headers, transaction_payload):
    headers = auth_headers()
    tx_id = client.post("/api/transactions", json=transaction_payload(), headers=headers).get_json()["id"]

    assert client.delete(f"/api/transactions/{tx_id}", headers=headers).status_code == 200
    assert client.delete(f"/api/transactions/{tx_id}", headers=headers).status_code == 404


def test_list_is_newest_first(client, auth_headers, transaction_payload):
    headers = auth_headers()
    for day in ("2024-01-05", "2024-03-01", "2024-02-10"):
        client.post("/api/transactions", json=transaction_payload(date=day), headers=headers)

    dates = [row["date"] for row in client.get("/api/transactions", headers=headers).get_json()]

    assert dates == ["2024-03-01", "2024-02-10", "2024-01-05"]


@pytest.mark.parametrize(
    "method,path,status",
    [
        ("GET", "/api/transactions/abc", 404),
        ("PUT", "/api/transactions/abc", 404),
        ("GET", "/api/nope", 404),
        ("PATCH", "/api/transactions/1", 405),
    ],
)
def test_routing_errors_are_json(client, auth_headers, method, path, status):
    response = client.open(path, method=method, headers=auth_headers())

    assert response.status_code == status
    assert response.is_json
    assert response.get_json()["message"]


def test_unexpected_errors_are_json(app, client):
    def boom():
        raise RuntimeError("kaput")

    app.add_url_rule("/api/boom", "boom", boom)

    response = client.get("/api/boom")

    assert response.status_code == 500
    assert response.get_json() == {"message": "Error en el servidor."}
