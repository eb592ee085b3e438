"""HTTP client for the ExpenseDesk API.

Mirrors the calls the front end makes. Every request carries the bearer
token; any non-2xx response raises :class:`ApiError` and nothing is retried.
"""
from typing import Any, Dict, List, Optional
import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class ApiClient:

    def __init__(self, base_url: str = "http://localhost:8000", token: Optional[str] = None,
                 user_id: Optional[str] = None, http_client: Optional[httpx.Client] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self._owns_client = http_client is None
        self.token = token
        self.user_id = user_id

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if self.user_id:
            headers["X-User-Id"] = self.user_id
        return headers

    def request(self, method: str, endpoint: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, endpoint, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"API request failed: {method} {endpoint}: {e}")
            raise ApiError(0, str(e)) from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = (body.get("error") if isinstance(body, dict) else None) or response.text
            logger.error(f"API request failed: {method} {endpoint} -> {response.status_code} {message}")
            raise ApiError(response.status_code, message)

        return response.json()

    # Health and demo data
    def health(self) -> dict:
        return self.request("GET", "/health")

    def setup(self) -> dict:
        return self.request("POST", "/setup")

    # Authentication
    def authenticate_user(self, email: str, password: str) -> dict:
        """Log in and remember the user id for later approval decisions."""
        user = self.request("POST", "/auth/login", json={"email": email, "password": password})
        self.user_id = user["id"]
        return user

    def get_user(self, email: str) -> dict:
        return self.request("GET", f"/user/{email}")

    # Currency
    def convert_currency(self, from_currency: str, to_currency: str, amount: float) -> dict:
        return self.request("GET", f"/convert/{from_currency}/{to_currency}/{amount}")

    def get_currencies(self) -> List[dict]:
        return self.request("GET", "/currencies")

    # Expenses
    def get_expenses(self, user_id: str) -> List[dict]:
        return self.request("GET", f"/expenses/{user_id}")

    def create_expense(self, expense_data: dict) -> dict:
        return self.request("POST", "/expenses", json=expense_data)

    # Approvals
    def get_pending_approvals(self, user_id: str) -> List[dict]:
        return self.request("GET", f"/approvals/{user_id}")

    def process_approval(self, approval_id: str, status: str, comments: Optional[str] = None) -> dict:
        return self.request("POST", f"/approvals/{approval_id}", json={"status": status, "comments": comments})

    # OCR
    def process_receipt(self, content: bytes, filename: str = "receipt.jpg",
                        content_type: str = "image/jpeg") -> dict:
        return self.request("POST", "/ocr/process-receipt", files={"receipt": (filename, content, content_type)})

    # Admin
    def get_company(self) -> Optional[dict]:
        return self.request("GET", "/company")

    def create_company(self, company_data: dict) -> dict:
        return self.request("POST", "/company", json=company_data)

    def get_users(self) -> List[dict]:
        return self.request("GET", "/users")

    def create_user(self, user_data: dict) -> dict:
        return self.request("POST", "/users", json=user_data)

    def update_user(self, user_id: str, changes: dict) -> dict:
        return self.request("PUT", f"/users/{user_id}", json=changes)

    def delete_user(self, user_id: str) -> dict:
        return self.request("DELETE", f"/users/{user_id}")

    def get_approval_rules(self) -> List[dict]:
        return self.request("GET", "/approval-rules")

    def create_approval_rule(self, rule_data: dict) -> dict:
        return self.request("POST", "/approval-rules", json=rule_data)

    # Analytics
    def get_dashboard(self, user_id: str) -> dict:
        return self.request("GET", f"/analytics/dashboard/{user_id}")
