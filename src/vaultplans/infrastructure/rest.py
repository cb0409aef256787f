"""VaultGateway adapter for the Obsidian Local REST API.

Endpoints used:

- ``GET /``               server status
- ``GET /vault/``         ``{"files": [...]}`` for the whole vault
- ``GET /vault/{dir}/``   ``{"files": [...]}`` for one folder
- ``GET /vault/{path}``   document text
- ``PUT /vault/{path}``   upsert (``text/markdown`` body)
- ``DELETE /vault/{path}``

Each call is attempted once. HTTP 404 maps to
:class:`VaultFileNotFoundError`; every other failure to :class:`GatewayError`.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import requests

from vaultplans.infrastructure.gateway import GatewayError, VaultFileNotFoundError

if TYPE_CHECKING:
    from vaultplans.config.models import ApiConfig
    from vaultplans.config.settings import PlanSettings

logger = logging.getLogger(__name__)


class RestVaultGateway:
    """:class:`~vaultplans.infrastructure.gateway.VaultGateway` over HTTP."""

    def __init__(
        self,
        api_url: str,
        *,
        api_key: str | None = None,
        timeout: float | None = None,
        verify_ssl: bool = True,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.verify = verify_ssl
        self._session.headers["Content-Type"] = "application/json"
        if api_key:
            self._session.headers["Authorization"] = f"Bearer {api_key}"

    @classmethod
    def from_config(cls, config: ApiConfig) -> RestVaultGateway:
        return cls(
            config.url,
            api_key=config.key,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _vault_url(self, path: str) -> str:
        return f"{self._base_url}/vault/{quote(path, safe='/')}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        path: str | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise GatewayError(f"{method} {url} failed: {exc}", path=path) from exc

        if response.ok:
            return response

        message = _error_message(response)
        if response.status_code == 404:
            raise VaultFileNotFoundError(message, path=path, status=404)
        raise GatewayError(message, path=path, status=response.status_code)

    def _request_json(self, url: str, *, path: str | None = None) -> dict[str, Any]:
        response = self._request("GET", url, path=path)
        try:
            payload = response.json()
        except ValueError as exc:
            raise GatewayError(f"Malformed JSON from {url}", path=path) from exc
        if not isinstance(payload, dict):
            raise GatewayError(f"Unexpected payload from {url}", path=path)
        return payload

    # ------------------------------------------------------------------
    # VaultGateway
    # ------------------------------------------------------------------

    def get_status(self) -> dict[str, Any]:
        return self._request_json(f"{self._base_url}/")

    def list_files(self) -> list[str]:
        payload = self._request_json(f"{self._base_url}/vault/")
        return _files_from(payload)

    def list_directory(self, path: str) -> list[str]:
        folder = path.rstrip("/")
        payload = self._request_json(self._vault_url(folder) + "/", path=folder)
        return _files_from(payload)

    def get_file(self, path: str) -> str:
        response = self._request(
            "GET",
            self._vault_url(path),
            path=path,
            headers={"Accept": "text/markdown"},
        )
        return response.text

    def create_or_update_file(self, path: str, text: str) -> None:
        self._request(
            "PUT",
            self._vault_url(path),
            path=path,
            data=text.encode("utf-8"),
            headers={"Content-Type": "text/markdown"},
        )

    def delete_file(self, path: str) -> None:
        self._request("DELETE", self._vault_url(path), path=path)


def _files_from(payload: dict[str, Any]) -> list[str]:
    files = payload.get("files")
    if not isinstance(files, list):
        raise GatewayError("Listing payload has no 'files' array")
    return [str(f) for f in files]


def _error_message(response: requests.Response) -> str:
    """Best error text for a failed response: JSON ``message``, body, or status."""
    fallback = f"HTTP error! status: {response.status_code}"
    text = response.text
    if not text:
        return fallback
    try:
        body = json.loads(text)
    except ValueError:
        return text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


def create_gateway(settings: PlanSettings) -> RestVaultGateway:
    """Build the REST gateway described by *settings*."""
    return RestVaultGateway.from_config(settings.api)
