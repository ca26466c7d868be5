"""Subida de credenciales a un servicio de almacenamiento HTTP.

Contrato del bloque `storage` del contexto:
- `url`: endpoint de subida;
- `params`: se envían en el body junto a `id` (clave) y `data` (documento);
  `params.resultPath` (JSON pointer) selecciona la URI si la respuesta no
  trae `{uri, key, hash}`;
- `options.method` (`POST` por defecto o `PUT`) y `options.headers`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from jsonpointer import JsonPointerException, resolve_pointer

from adapters.http_client import build_async_client, response_reason
from core.config import AppSettings
from core.domain.context import StorageConfig
from core.domain.models import StorageRecord
from core.errors import StorageUploadError

logger = logging.getLogger(__name__)

_METHODS = ("POST", "PUT")


def parse_storage_response(data: Any, result_path: str | None = None) -> str | StorageRecord:
    if isinstance(data, dict) and isinstance(data.get("uri"), str):
        return StorageRecord(uri=data["uri"], key=data.get("key"), hash=data.get("hash"))
    if result_path:
        try:
            value = resolve_pointer(data, result_path, None)
        except JsonPointerException as exc:
            raise StorageUploadError(f"Invalid storage resultPath: {result_path}") from exc
        if isinstance(value, str) and value:
            return value
    if isinstance(data, str) and data:
        return data
    raise StorageUploadError("Failed to store verifiable credential: response has no uri")


class HttpDocumentStorage:
    """Implementa `DocumentStorage` sobre HTTP."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def upload(self, config: StorageConfig, document: Any, key: str) -> str | StorageRecord:
        options = config.options or {}
        method = str(options.get("method") or "POST").upper()
        if method not in _METHODS:
            raise StorageUploadError("Failed to store verifiable credential: Unsupported method")

        params = dict(config.params)
        result_path = params.pop("resultPath", None)
        body = {**params, "id": key, "data": document}

        headers = options.get("headers")
        extra = {str(k): str(v) for k, v in headers.items()} if isinstance(headers, dict) else {}
        try:
            async with build_async_client(
                self._settings, extra_headers=extra, transport=self._transport
            ) as client:
                response = await client.request(method, config.url, json=body)
        except httpx.HTTPError as exc:
            raise StorageUploadError(
                f"Failed to store verifiable credential: {str(exc) or 'Unknown error'}"
            ) from exc

        if not response.is_success:
            raise StorageUploadError(
                "Failed to store verifiable credential: "
                f"HTTP {response.status_code}: {response_reason(response)}"
            )

        try:
            data = response.json()
        except ValueError:
            data = response.text.strip()

        logger.debug("Stored document under key %s", key)
        return parse_storage_response(data, result_path)
