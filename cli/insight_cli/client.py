"""HTTP client for the Insight API."""
from __future__ import annotations

from typing import Any

import httpx

DEFAULT_API_URL = "http://localhost:4321"


class ApiError(Exception):
    """Server rejected a request. Carries the status code and the server's message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ApiClient:
    """HTTP client for the Insight API."""

    def __init__(self, api_url: str = DEFAULT_API_URL, client: httpx.Client | None = None):
        self.api_url = api_url.rstrip("/")
        self.client = client or httpx.Client(timeout=60.0)

    def _unwrap(self, res: httpx.Response) -> Any:
        """Return the `result` payload, or raise ApiError with the server's `error`."""
        try:
            body = res.json()
        except ValueError:
            body = {}
        if res.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(res.status_code, message or res.text or res.reason_phrase)
        return body.get("result")

    def add_dataset(self, dataset_id: str, kind: str, archive: bytes) -> list[str]:
        res = self.client.put(
            f"{self.api_url}/dataset/{dataset_id}/{kind}",
            content=archive,
            headers={"Content-Type": "application/zip"},
        )
        return self._unwrap(res)

    def remove_dataset(self, dataset_id: str) -> str:
        res = self.client.delete(f"{self.api_url}/dataset/{dataset_id}")
        return self._unwrap(res)

    def list_datasets(self) -> list[dict[str, Any]]:
        res = self.client.get(f"{self.api_url}/datasets")
        return self._unwrap(res)

    def query(self, query: Any) -> list[dict[str, Any]]:
        res = self.client.post(f"{self.api_url}/query", json=query)
        return self._unwrap(res)

    def close(self):
        """Close client."""
        self.client.close()
