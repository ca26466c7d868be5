"""Contexto tipado por operación.

Por qué modelos separados:
- El contexto llega como un dict "suelto" (app config en camelCase). Tras la
  validación procedimental se congela en un `OperationContext` tipado que
  consumen el orquestador y los adaptadores.
- Cada bloque conserva sus alias originales para poder construirse
  directamente desde el JSON de configuración.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import DefaultFlags

_FROZEN = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class IssuanceConfig(BaseModel):
    """Bloque `vckit`: dónde y como quién se emite la credencial."""

    model_config = _FROZEN

    vckit_api_url: str = Field(..., alias="vckitAPIUrl")
    issuer: Any = Field(..., description="DID del emisor (string u objeto `{id, ...}`).")
    headers: dict[str, Any] | None = Field(
        default=None,
        description="Headers extra para el issuer; se validan al emitir.",
    )


class CredentialTypeConfig(BaseModel):
    """Bloque específico del tipo (dpp, digitalConformityCredential, epcis*...)."""

    model_config = _FROZEN

    context: list[Any]
    type: list[str]
    render_template: Any = Field(default=None, alias="renderTemplate")
    dlr_link_title: str = Field(..., alias="dlrLinkTitle")
    dlr_verification_page: str = Field(..., alias="dlrVerificationPage")
    dlr_identification_key_type: str | None = Field(default=None, alias="dlrIdentificationKeyType")
    valid_until: str | None = Field(default=None, alias="validUntil")


class StorageConfig(BaseModel):
    model_config = _FROZEN

    url: str
    params: dict[str, Any]
    options: dict[str, Any] | None = None


class ResolverConfig(BaseModel):
    """Bloque `dlr`: resolver de destino y cómo autenticarse."""

    model_config = _FROZEN

    dlr_api_url: str = Field(..., alias="dlrAPIUrl")
    dlr_api_key: str = Field(..., alias="dlrAPIKey")
    namespace: str
    type: Literal["DLR", "PYX_IDR"] = "DLR"
    default_context: str = Field(default="au", alias="defaultContext")
    default_flags: DefaultFlags = Field(default_factory=DefaultFlags, alias="defaultFlags")
    item_description: str | None = Field(default=None, alias="itemDescription")


class LocalStorageParams(BaseModel):
    model_config = _FROZEN

    storage_key: str = Field(..., alias="storageKey")
    keys: list[str] = Field(default_factory=list)


class OperationContext(BaseModel):
    """Contexto validado; se construye una vez y no se muta."""

    model_config = ConfigDict(frozen=True)

    issuance: IssuanceConfig
    credential: CredentialTypeConfig
    storage: StorageConfig
    resolver: ResolverConfig
    identifier_key_path: Any = Field(
        ...,
        description="JSON pointer (str) o descriptor `{primary, qualifiers}`; se interpreta al resolver.",
    )
    local_storage_params: LocalStorageParams | None = None
