"""Tests for the HTTP client, driven against the app in-process."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from expensedesk.client.api_client import ApiClient, ApiError
from expensedesk.config import Config


@pytest.fixture
def api(seeded_client: TestClient) -> ApiClient:
    return ApiClient(http_client=seeded_client)


class TestApiClient:

    def test_health(self, api: ApiClient) -> None:
        assert api.health()["status"] == "healthy"

    def test_login_remembers_user(self, api: ApiClient) -> None:
        user = api.authenticate_user("manager@company.com", "manager123")
        assert user["id"] == "manager-001"
        assert api.user_id == "manager-001"

    def test_login_failure_raises(self, api: ApiClient) -> None:
        with pytest.raises(ApiError) as exc_info:
            api.authenticate_user("manager@company.com", "bad")
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid credentials"
        assert api.user_id is None

    def test_submit_and_approve(self, api: ApiClient) -> None:
        expense = api.create_expense({
            "employee_id": "employee-001",
            "amount": 100,
            "currency": "EUR",
            "category": "Travel",
            "date": "2024-05-05",
        })
        assert expense["amount_in_company_currency"] == 118.0

        api.authenticate_user("manager@company.com", "manager123")
        step = api.get_pending_approvals("manager-001")[0]
        decided = api.process_approval(step["id"], "rejected", "No receipt")

        assert decided["decided_by"] == "manager-001"
        assert decided["comments"] == "No receipt"
        statuses = {e["id"]: e["status"] for e in api.get_expenses("employee-001")}
        assert statuses[expense["id"]] == "rejected"

    def test_currency_calls(self, api: ApiClient) -> None:
        assert api.convert_currency("GBP", "USD", 10)["convertedAmount"] == 13.7
        assert len(api.get_currencies()) == 10

    def test_admin_calls(self, api: ApiClient) -> None:
        assert api.get_company()["currency"] == "USD"

        user = api.create_user({"name": "Kim", "email": "kim@company.com", "role": "manager"})
        assert api.update_user(user["id"], {"name": "Kim P."})["name"] == "Kim P."
        assert any(u["id"] == user["id"] for u in api.get_users())
        assert api.delete_user(user["id"]) == {"success": True}

        rule = api.create_approval_rule({"type": "specific", "specific_approver_id": "admin-001"})
        assert rule["id"] in {r["id"] for r in api.get_approval_rules()}

    def test_dashboard(self, api: ApiClient) -> None:
        assert api.get_dashboard("admin-001")["expenseCount"] == 2

    def test_process_receipt(self, api: ApiClient) -> None:
        result = api.process_receipt(b"\xff\xd8jpeg")
        assert result["success"] is True
        assert set(result["data"]) == {"amount", "date", "vendor", "category", "description", "confidence"}

    def test_not_found_raises(self, api: ApiClient) -> None:
        with pytest.raises(ApiError) as exc_info:
            api.get_user("ghost@company.com")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "User not found"

    def test_sends_bearer_token(self, seeded_client: TestClient, monkeypatch) -> None:
        monkeypatch.setattr(Config, "API_TOKEN", "s3cret")

        with pytest.raises(ApiError) as exc_info:
            ApiClient(http_client=seeded_client).get_currencies()
        assert exc_info.value.status_code == 401

        assert len(ApiClient(http_client=seeded_client, token="s3cret").get_currencies()) == 10

    def test_transport_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        http_client = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(refuse))
        with ApiClient(http_client=http_client) as api:
            with pytest.raises(ApiError) as exc_info:
                api.health()
        assert exc_info.value.status_code == 0
