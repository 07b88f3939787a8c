import pytest

from tests.fakes import ADMIN, CLIENT, bearer, store_failure


@pytest.fixture
def client_token(fakes) -> str:
    return fakes.auth.issue(CLIENT.id, CLIENT.email).access_token


@pytest.fixture
def admin_token(fakes) -> str:
    return fakes.auth.issue(ADMIN.id, ADMIN.email).access_token


def test_client_dashboard_returns_stats(api, client_token) -> None:
    response = api.get("/api/client/dashboard", headers=bearer(client_token))

    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["initial"] == 80.0
    assert body["stats"]["current"] == 78.4
    assert body["stats"]["trend"] == "down"
    assert [p["label"] for p in body["weights"]] == ["05/01/2024", "05/02/2024"]


@pytest.mark.parametrize(
    ("weight", "message"),
    [
        ("-5", "Le poids doit être supérieur à 0"),
        ("0", "Le poids doit être supérieur à 0"),
        ("301", "Le poids semble invalide (> 300kg)"),
        ("abc", "Le poids doit être un nombre valide"),
    ],
)
def test_record_weight_rejects_invalid_input(api, fakes, client_token, weight, message) -> None:
    response = api.post("/api/client/weights", json={"weight": weight}, headers=bearer(client_token))

    assert response.status_code == 422
    assert response.json()["error"]["message"] == message
    assert fakes.weights.inserts == 0


def test_record_weight_returns_refreshed_dashboard(api, client_token) -> None:
    response = api.post("/api/client/weights", json={"weight": "72.5"}, headers=bearer(client_token))

    assert response.status_code == 201
    stats = response.json()["stats"]
    assert stats["current"] == 72.5
    assert stats["trend"] == "down"


def test_client_dashboard_load_failure_is_retryable(api, fakes, client_token) -> None:
    fakes.weights.fail = store_failure()

    response = api.get("/api/client/dashboard", headers=bearer(client_token))

    assert response.status_code == 503
    assert response.json()["error"]["details"]["retryable"] is True


def test_client_cannot_open_admin_dashboard(api, client_token) -> None:
    assert api.get("/api/admin/dashboard", headers=bearer(client_token)).status_code == 403


def test_admin_cannot_log_weights(api, admin_token) -> None:
    response = api.post("/api/client/weights", json={"weight": "80"}, headers=bearer(admin_token))

    assert response.status_code == 403


def test_admin_dashboard_overview(api, admin_token) -> None:
    response = api.get("/api/admin/dashboard", headers=bearer(admin_token))

    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["client_count"] == 1
    assert body["stats"]["completed_appointments"] == 1
    assert body["monthly_revenue"][0]["month"] == "janvier 2024"


def test_admin_client_search(api, admin_token) -> None:
    found = api.get("/api/admin/clients", params={"search": "LAURENT"}, headers=bearer(admin_token)).json()
    missing = api.get("/api/admin/clients", params={"search": "zzz"}, headers=bearer(admin_token)).json()

    assert [c["id"] for c in found] == [CLIENT.id]
    assert missing == []


def test_admin_creates_client(api, fakes, admin_token) -> None:
    response = api.post(
        "/api/admin/clients",
        json={"full_name": "Sophie Martin", "email": "sophie@example.com", "password": "secret123"},
        headers=bearer(admin_token),
    )

    assert response.status_code == 201
    assert response.json()["role"] == "client"


def test_admin_create_client_partial_failure_is_reported(api, fakes, admin_token) -> None:
    fakes.profiles.fail_create = store_failure("insert failed")
    fakes.auth.fail_delete_user = True

    response = api.post(
        "/api/admin/clients",
        json={"full_name": "Sophie Martin", "email": "sophie@example.com", "password": "secret123"},
        headers=bearer(admin_token),
    )

    assert response.status_code == 502
    error = response.json()["error"]
    assert error["code"] == "PartialFailureError"
    assert error["details"]["failed"] == "profile"


def test_admin_delete_client_requires_confirm(api, fakes, admin_token) -> None:
    response = api.delete(f"/api/admin/clients/{CLIENT.id}", headers=bearer(admin_token))

    assert response.status_code == 422
    assert CLIENT.id in fakes.profiles.profiles

    confirmed = api.delete(f"/api/admin/clients/{CLIENT.id}", params={"confirm": "true"}, headers=bearer(admin_token))
    assert confirmed.status_code == 200
    assert CLIENT.id not in fakes.profiles.profiles


def test_admin_creates_invoice_with_file(api, fakes, admin_token) -> None:
    response = api.post(
        "/api/admin/invoices",
        data={"client_id": CLIENT.id, "amount": "150.00", "due_date": "2024-07-01", "status": "paid"},
        files={"file": ("facture.pdf", b"%PDF-1.4", "application/pdf")},
        headers=bearer(admin_token),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["partial_failure"] is False
    assert body["invoice"]["status"] == "paid"
    assert body["invoice"]["file_status"] == "attached"

    listed = api.get("/api/admin/invoices", headers=bearer(admin_token)).json()
    assert [i["id"] for i in listed] == [body["invoice"]["id"]]


def test_admin_invoice_upload_failure_is_partial(api, fakes, admin_token) -> None:
    fakes.storage.fail = True

    response = api.post(
        "/api/admin/invoices",
        data={"client_id": CLIENT.id, "amount": "150.00", "due_date": "2024-07-01"},
        files={"file": ("facture.pdf", b"%PDF-1.4", "application/pdf")},
        headers=bearer(admin_token),
    )

    assert response.status_code == 201
    assert response.json()["partial_failure"] is True
    assert response.json()["invoice"]["file_status"] == "missing"


def test_admin_invoice_rejects_non_positive_amount(api, admin_token) -> None:
    response = api.post(
        "/api/admin/invoices",
        data={"client_id": CLIENT.id, "amount": "0", "due_date": "2024-07-01"},
        headers=bearer(admin_token),
    )

    assert response.status_code == 422


def test_admin_delete_invoice(api, fakes, admin_token) -> None:
    created = api.post(
        "/api/admin/invoices",
        data={"client_id": CLIENT.id, "amount": "60", "due_date": "2024-07-01"},
        headers=bearer(admin_token),
    ).json()["invoice"]

    response = api.delete(f"/api/admin/invoices/{created['id']}", params={"confirm": "true"}, headers=bearer(admin_token))

    assert response.status_code == 200
    assert fakes.invoices.invoices == {}


def test_admin_logout_audit_list(api, fakes, admin_token, client_token) -> None:
    api.post("/api/auth/logout", headers=bearer(client_token))

    response = api.get("/api/admin/sessions", headers=bearer(admin_token))

    assert response.status_code == 200
    assert response.json()[0]["user_id"] == CLIENT.id


def test_admin_create_client_provider_outage(api, fakes, admin_token) -> None:
    fakes.auth.fail_create_user = True

    response = api.post(
        "/api/admin/clients",
        json={"full_name": "Sophie Martin", "email": "sophie@example.com", "password": "secret123"},
        headers=bearer(admin_token),
    )

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "AuthProviderError"
