# src/clients/base_client.py

"""Shared JSON-over-HTTP plumbing for every outbound API client."""

import json
import logging
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.errors import ProviderError


class BaseApiClient:
    """Base class for the oracle and rate provider clients.

    Each call is a single attempt with a bounded timeout.  Transport
    errors, non-200 responses and malformed JSON are all raised as
    ``error_cls`` (a :class:`ProviderError`) naming the client.
    """

    error_cls: type[ProviderError] = ProviderError

    def __init__(
        self,
        client_name: str,
        base_url: str,
        timeout: float = Settings.REQUEST_TIMEOUT,
    ) -> None:
        self.client_name = client_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logging.getLogger(
            f"shop_assistant.{client_name}"
        )

    def _headers(self) -> dict[str, str]:
        """Headers sent with every request; subclasses add auth."""
        return dict(Settings.DEFAULT_HEADERS)

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = curl_requests.request(
                method,
                url,
                headers=self._headers(),
                params=params,
                json=payload,
                timeout=self.timeout,
            )
        except Exception as exc:
            self.logger.warning(
                "[%s] %s %s failed: %s",
                self.client_name,
                method,
                path,
                exc,
            )
            raise self.error_cls(
                f"{self.client_name} request failed: {exc}"
            ) from exc

        if resp.status_code != 200:
            self.logger.warning(
                "[%s] HTTP %d from %s %s",
                self.client_name,
                resp.status_code,
                method,
                path,
            )
            raise self.error_cls(
                f"{self.client_name} returned HTTP {resp.status_code}: "
                f"{resp.text[:200]}"
            )

        try:
            return json.loads(resp.text)
        except ValueError as exc:
            raise self.error_cls(
                f"{self.client_name} returned malformed JSON: {exc}"
            ) from exc

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def _post(self, path: str, payload: dict[str, Any]) -> Any:
        return self._request("POST", path, payload=payload)
