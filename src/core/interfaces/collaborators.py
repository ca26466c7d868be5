"""Colaboradores externos del orquestador (emisión, storage, caché local).

El Core depende de estos contratos; `adapters/` aporta las implementaciones
HTTP y de sistema de ficheros.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, runtime_checkable

from core.domain.context import StorageConfig
from core.domain.models import StorageRecord


@dataclass
class IssueRequest:
    """Parámetros de emisión de una credencial."""

    credential_subject: Any
    issuer: Any
    context: list[Any]
    type: list[str]
    api_url: str
    rest_of_vc: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, Any] | None = None


@runtime_checkable
class CredentialIssuer(Protocol):
    async def issue(self, request: IssueRequest) -> dict[str, Any]:
        """Return the issued credential document (expanded or enveloped)."""

        ...


@runtime_checkable
class DocumentStorage(Protocol):
    async def upload(self, config: StorageConfig, document: Any, key: str) -> str | StorageRecord:
        """Persist `document` under `key` and return its reference."""

        ...


@runtime_checkable
class LocalCache(Protocol):
    def delete_values(self, storage_key: str, keys: Sequence[str]) -> None:
        ...
