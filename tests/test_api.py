from datetime import date

from sqlalchemy import select

from dashboard.actions.invoices import create_invoice
from dashboard.db.schema import invoices
from dashboard.models.invoices import AMOUNT_ERROR, CUSTOMER_ERROR, STATUS_ERROR
from tests.conftest import TEST_PASSWORD

INVOICES_PATH = "/dashboard/invoices"


def _seed_invoice(engine, **form):
    data = {"customerId": "c1", "amount": "10", "status": "pending", **form}
    return create_invoice(engine, data, as_of=date(2023, 3, 1)).invoice_id


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_create_redirects_to_listing(client, engine):
    res = client.post(
        INVOICES_PATH,
        data={"customerId": "c1", "amount": "15.50", "status": "paid"},
        follow_redirects=False,
    )

    assert res.status_code == 303
    assert res.headers["location"] == INVOICES_PATH

    with engine.connect() as conn:
        row = conn.execute(select(invoices)).mappings().one()
    assert row["amount"] == 1550


def test_create_with_missing_fields_returns_state(client):
    res = client.post(INVOICES_PATH, data={"customerId": "", "amount": "10", "status": "pending"})

    assert res.status_code == 422
    assert res.json() == {
        "errors": {"customerId": [CUSTOMER_ERROR]},
        "message": "Missing Fields. Failed to Create Invoice.",
    }


def test_create_with_empty_body_lists_every_error(client):
    res = client.post(INVOICES_PATH, data={})

    assert res.status_code == 422
    assert res.json()["errors"] == {
        "customerId": [CUSTOMER_ERROR],
        "amount": [AMOUNT_ERROR],
        "status": [STATUS_ERROR],
    }


def test_listing_is_cached_until_a_mutation(client, engine, view_cache):
    _seed_invoice(engine)
    assert len(client.get(INVOICES_PATH).json()) == 1

    # Written behind the cache's back: still the cached view
    _seed_invoice(engine, customerId="c2")
    assert len(client.get(INVOICES_PATH).json()) == 1
    assert INVOICES_PATH in view_cache

    client.post(
        INVOICES_PATH,
        data={"customerId": "c3", "amount": "1", "status": "paid"},
        follow_redirects=False,
    )
    assert INVOICES_PATH not in view_cache
    assert len(client.get(INVOICES_PATH).json()) == 3


def test_get_invoice(client, engine):
    invoice_id = _seed_invoice(engine, amount="42")

    res = client.get(f"{INVOICES_PATH}/{invoice_id}")

    assert res.status_code == 200
    assert res.json() == {
        "id": invoice_id,
        "customer_id": "c1",
        "amount": 4200,
        "status": "pending",
        "date": "2023-03-01",
    }


def test_get_missing_invoice_is_404(client):
    res = client.get(f"{INVOICES_PATH}/missing")
    assert res.status_code == 404
    assert res.json()["detail"] == "Invoice not found"


def test_update_via_form(client, engine):
    invoice_id = _seed_invoice(engine)

    res = client.post(
        f"{INVOICES_PATH}/{invoice_id}/edit",
        data={"customerId": "c2", "amount": "20", "status": "paid"},
        follow_redirects=False,
    )

    assert res.status_code == 303
    body = client.get(f"{INVOICES_PATH}/{invoice_id}").json()
    assert body["customer_id"] == "c2"
    assert body["amount"] == 2000
    assert body["date"] == "2023-03-01"


def test_update_with_bad_status_returns_state(client, engine):
    invoice_id = _seed_invoice(engine)

    res = client.post(
        f"{INVOICES_PATH}/{invoice_id}/edit",
        data={"customerId": "c2", "amount": "20", "status": "void"},
    )

    assert res.status_code == 422
    assert res.json()["message"] == "Missing Fields. Failed to Update Invoice."


def test_delete_via_form(client, engine):
    invoice_id = _seed_invoice(engine)

    res = client.post(f"{INVOICES_PATH}/{invoice_id}/delete", follow_redirects=False)
    assert res.status_code == 303
    assert client.get(INVOICES_PATH).json() == []

    again = client.post(f"{INVOICES_PATH}/{invoice_id}/delete", follow_redirects=False)
    assert again.status_code == 303


def test_login_success_redirects(client, user):
    res = client.post(
        "/login",
        data={"email": user["email"], "password": TEST_PASSWORD, "redirectTo": "/dashboard/invoices"},
        follow_redirects=False,
    )

    assert res.status_code == 303
    assert res.headers["location"] == "/dashboard/invoices"


def test_login_ignores_offsite_redirect(client, user):
    res = client.post(
        "/login",
        data={"email": user["email"], "password": TEST_PASSWORD, "redirectTo": "//evil.example"},
        follow_redirects=False,
    )

    assert res.headers["location"] == "/dashboard"


def test_login_with_wrong_password(client, user):
    res = client.post("/login", data={"email": user["email"], "password": "nope-nope"})

    assert res.status_code == 401
    assert res.json() == {"message": "Invalid credentials."}


def test_create_with_huge_amount_returns_state(client, engine):
    res = client.post(INVOICES_PATH, data={"customerId": "c1", "amount": "1e20", "status": "paid"})

    assert res.status_code == 422
    assert res.json()["errors"] == {"amount": [AMOUNT_ERROR]}
    with engine.connect() as conn:
        assert conn.execute(select(invoices)).first() is None
