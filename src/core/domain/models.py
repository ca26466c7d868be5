"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar el
  Core a librerías de I/O.
- Los modelos "wire" (registro en resolvers) serializan con alias camelCase en
  el orden exacto que esperan los servidores.

Nota:
- Estos modelos describen *qué* se publica, no *cómo* se envía.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

JSON_MIME_TYPE = "application/json"


class AIValue(BaseModel):
    """Par Application Identifier / valor (p.ej. `01` / GTIN)."""

    model_config = ConfigDict(frozen=True)

    ai: str = Field(..., description="Application Identifier GS1 (2-3 dígitos).")
    value: str | None = Field(
        default=None,
        description="Valor del AI; None cuando el puntero no resolvió nada.",
    )


class Identifier(BaseModel):
    """Identificador canónico `{primary, qualifiers}`."""

    model_config = ConfigDict(frozen=True)

    primary: AIValue
    qualifiers: list[AIValue] = Field(default_factory=list)


class AIPath(BaseModel):
    model_config = ConfigDict(frozen=True)

    ai: str
    path: str = Field(..., description="JSON pointer hacia el valor dentro de `data`.")


class IdentifierKeyPathDescriptor(BaseModel):
    """Descriptor explícito: un puntero por AI."""

    model_config = ConfigDict(frozen=True)

    primary: AIPath
    qualifiers: list[AIPath] = Field(default_factory=list)


class LinkDescriptor(BaseModel):
    """Enlace lógico que se quiere hacer descubrible para un identificador."""

    model_config = ConfigDict(frozen=True)

    href: str
    rel: str
    type: str | None = None
    title: str
    hreflang: list[str] | None = None
    default: bool | None = None
    context: str | None = None


class DefaultFlags(BaseModel):
    """Flags por defecto que un adaptador está autorizado a propagar.

    Se fija una vez al construir el adaptador y no cambia por llamada.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    default_link_type: bool = Field(default=False, alias="defaultLinkType")
    default_iana_language: bool = Field(default=False, alias="defaultIanaLanguage")
    default_context: bool = Field(default=False, alias="defaultContext")
    default_mime_type: bool = Field(default=False, alias="defaultMimeType")
    fwqs: bool = False


class LinkResponse(BaseModel):
    """Respuesta individual dentro del payload de registro (wire)."""

    model_config = ConfigDict(populate_by_name=True)

    link_type: str = Field(..., alias="linkType")
    target_url: str = Field(..., alias="targetUrl")
    mime_type: str = Field(default=JSON_MIME_TYPE, alias="mimeType")
    title: str
    iana_language: str = Field(default="en", alias="ianaLanguage")
    context: str
    active: bool = True
    default_link_type: bool = Field(default=False, alias="defaultLinkType")
    default_iana_language: bool = Field(default=False, alias="defaultIanaLanguage")
    default_context: bool = Field(default=False, alias="defaultContext")
    default_mime_type: bool = Field(default=False, alias="defaultMimeType")
    fwqs: bool = False


class LinkResolverRegistration(BaseModel):
    """Unidad enviada al resolver en `POST /resolver`."""

    model_config = ConfigDict(populate_by_name=True)

    namespace: str
    identification_key_type: str = Field(..., alias="identificationKeyType")
    identification_key: str = Field(..., alias="identificationKey")
    item_description: str = Field(..., alias="itemDescription")
    qualifier_path: str = Field(default="/", alias="qualifierPath")
    active: bool = True
    responses: list[LinkResponse] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class LinkRegistration(BaseModel):
    """Resultado de un registro correcto."""

    model_config = ConfigDict(populate_by_name=True)

    resolver_uri: str = Field(..., alias="resolverURI")
    identifier_scheme: str = Field(..., alias="identifierScheme")
    identifier: str


class StorageRecord(BaseModel):
    """Referencia devuelta por el servicio de almacenamiento."""

    uri: str
    key: str | None = None
    hash: str | None = None


class PublishResult(BaseModel):
    """Salida de una ejecución del publicador."""

    model_config = ConfigDict(populate_by_name=True)

    credential: dict[str, Any]
    decoded_credential: dict[str, Any] | None = Field(default=None, alias="decodedCredential")
    resolver_uri: str = Field(..., alias="resolverURI")


class ResolverDescription(BaseModel):
    """Auto-descripción publicada en `/.well-known/resolver`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Any = None
    resolver_root: str | None = Field(default=None, alias="resolverRoot")
    supported_link_types: list[Any] | None = Field(default=None, alias="supportedLinkTypes")


class LinkTypeInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    namespace: str
    type: str
    title: str | None = None

    @property
    def qualified(self) -> str:
        return f"{self.namespace}:{self.type}"


class VerificationWarning(BaseModel):
    type: Literal["missing_link_type"] = "missing_link_type"
    message: str
