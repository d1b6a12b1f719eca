import httpx
import pytest

from ballie.client import ApiClient, unwrap
from ballie.config import save_session
from ballie.utils import ApiError

PREFIX = "/api/v1/tenant/acme"


def test_requests_are_tenant_scoped_and_authorised(make_client):
    client, recorder = make_client(
        {("GET", f"{PREFIX}/accounting/vouchers"): (200, {"success": True, "data": {"vouchers": []}})}
    )
    payload = client.get("/accounting/vouchers", {"page": 1, "search": None})
    assert unwrap(payload) == {"vouchers": []}
    request = recorder.requests[0]
    assert request.headers["Authorization"] == "Bearer tok-123"
    assert request.headers["Accept"] == "application/json"
    assert dict(request.url.params) == {"page": "1"}


def test_already_scoped_and_unscoped_paths(make_client):
    client, recorder = make_client(
        {
            ("GET", f"{PREFIX}/accounting/ledger-accounts"): (200, {}),
            ("POST", "/api/v1/auth/login"): (200, {}),
        }
    )
    client.get(client.tenant_path("/accounting/ledger-accounts"))
    client.post("/auth/login", {"email": "a@b.c"}, scoped=False)
    assert [r.url.path for r in recorder.requests] == [
        f"{PREFIX}/accounting/ledger-accounts",
        "/api/v1/auth/login",
    ]


def test_unauthorised_clears_session(make_client, settings):
    save_session(settings.session_path, {"auth_token": "tok-123", "tenant_slug": "acme"})
    client, _ = make_client(
        {("GET", f"{PREFIX}/crm/customers"): (401, {"success": False, "message": "Unauthenticated."})}
    )
    with pytest.raises(ApiError) as exc:
        client.get("/crm/customers")
    assert exc.value.code == "AUTH_REQUIRED"
    assert exc.value.status == 401
    assert exc.value.message == "Unauthenticated."
    assert not settings.session_path.exists()
    assert settings.token is None


def test_validation_errors_carry_field_messages(make_client):
    errors = {"name": ["The name field is required."]}
    client, _ = make_client(
        {
            ("POST", f"{PREFIX}/crm/vendors"): (
                422,
                {"success": False, "message": "Validation failed", "errors": errors},
            )
        }
    )
    with pytest.raises(ApiError) as exc:
        client.post("/crm/vendors", {})
    assert exc.value.code == "VALIDATION_ERROR"
    assert exc.value.details == {"errors": errors}
    assert exc.value.to_dict()["details"]["errors"] == errors


def test_other_statuses_and_fallback_message(make_client):
    client, _ = make_client(
        {
            ("GET", f"{PREFIX}/a"): (403, {"message": "Forbidden"}),
            ("GET", f"{PREFIX}/b"): (500, b"<html>oops</html>"),
        }
    )
    with pytest.raises(ApiError) as exc:
        client.get("/a")
    assert exc.value.code == "FORBIDDEN"
    with pytest.raises(ApiError) as exc:
        client.get("/b")
    assert exc.value.code == "HTTP_500"
    assert exc.value.message == "Something went wrong. Please try again."


def test_network_errors(settings):
    def boom(request):
        raise httpx.ConnectError("connection refused", request=request)

    with ApiClient(settings, transport=httpx.MockTransport(boom)) as client:
        with pytest.raises(ApiError) as exc:
            client.get("/accounting/vouchers")
    assert exc.value.code == "NETWORK_ERROR"


def test_non_json_success_body(make_client):
    client, _ = make_client({("GET", f"{PREFIX}/x"): (200, b"not json")})
    with pytest.raises(ApiError) as exc:
        client.get("/x")
    assert exc.value.code == "INVALID_RESPONSE"


def test_download_returns_raw_bytes(make_client):
    client, recorder = make_client({("GET", f"{PREFIX}/accounting/vouchers/3/pdf"): (200, b"%PDF-1.4")})
    assert client.download("/accounting/vouchers/3/pdf", accept="application/pdf") == b"%PDF-1.4"
    assert recorder.requests[0].headers["Accept"] == "application/pdf"


def test_url_for_includes_query(make_client):
    client, _ = make_client({})
    url = client.url_for("/crm/customers/5/statement/pdf", {"start_date": "2025-01-01", "skip": None})
    assert url == "http://api.test/api/v1/tenant/acme/crm/customers/5/statement/pdf?start_date=2025-01-01"


def test_unwrap_leaves_bare_payloads():
    assert unwrap({"data": [1], "success": True}) == [1]
    assert unwrap({"data": [1]}) == {"data": [1]}
    assert unwrap([1, 2]) == [1, 2]
