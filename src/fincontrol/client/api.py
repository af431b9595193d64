"""HTTP client for the FinControl API."""

from __future__ import annotations

from typing import Any, Optional

import requests

from ..logging_config import get_logger

logger = get_logger("client.api")


class ApiError(Exception):
    """Non-success response (or transport failure, status 0) from the API."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}")


class ApiClient:
    """Thin wrapper over ``requests`` that attaches the bearer token."""

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        session: Any = None,
        timeout: float = 10,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self, auth: bool) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, *, json: Any = None, auth: bool = True):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, json=json, headers=self._headers(auth), timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Request failed", extra={"method": method, "path": path, "error": str(exc)})
            raise ApiError(0, "No se pudo conectar con el servidor.") from exc
        if not response.ok:
            raise ApiError(response.status_code, _error_message(response))
        return response

    def register(self, username: str, password: str) -> dict[str, Any]:
        return self._request(
            "POST", "/api/auth/register", json={"username": username, "password": password}, auth=False
        ).json()

    def login(self, username: str, password: str) -> str:
        payload = self._request(
            "POST", "/api/auth/login", json={"username": username, "password": password}, auth=False
        ).json()
        self.token = payload["token"]
        return self.token

    def list_transactions(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/transactions").json()

    def create_transaction(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/transactions", json=payload).json()

    def update_transaction(self, transaction_id: int, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/api/transactions/{transaction_id}", json=payload).json()

    def delete_transaction(self, transaction_id: int) -> None:
        self._request("DELETE", f"/api/transactions/{transaction_id}")

    def export_csv(self) -> bytes:
        return self._request("GET", "/api/transactions/export/csv").content

    def export_pdf(self) -> bytes:
        return self._request("GET", "/api/transactions/export/pdf").content


def _error_message(response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text or f"HTTP {response.status_code}"
