"""Jerarquía de errores del publicador.

Por qué una jerarquía:
- Cada fallo local (contexto, identificador, entrada del resolver) tiene un
  mensaje fijo y un `code` estable que la CLI puede mostrar o filtrar.
- Los fallos de red del resolver se distinguen entre transporte y HTTP sin
  perder el identificador afectado.
"""

from __future__ import annotations


class PublisherError(Exception):
    """Base exception for every failure raised by this package."""

    code = "PUBLISHER_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class InvalidContext(PublisherError):
    code = "INVALID_CONTEXT"


class PayloadDataMissing(PublisherError):
    code = "PAYLOAD_DATA_MISSING"

    def __init__(self, label: str) -> None:
        super().__init__(f"{label} data not found")
        self.label = label


class InvalidIdentifierKeyPath(PublisherError):
    code = "INVALID_IDENTIFIER_KEY_PATH"

    def __init__(self, message: str = "Invalid identifierKeyPath") -> None:
        super().__init__(message)


class NoAIPairsFound(PublisherError):
    code = "NO_AI_PAIRS_FOUND"

    def __init__(self, message: str = "No AI-value pairs found in the URL.") -> None:
        super().__init__(message)


class IdentifierNotFound(PublisherError):
    code = "IDENTIFIER_NOT_FOUND"

    def __init__(self, message: str = "Identifier not found") -> None:
        super().__init__(message)


class PrimaryAIOrValueMissing(PublisherError):
    code = "PRIMARY_AI_OR_VALUE_MISSING"

    def __init__(self, message: str = "Primary AI or value not found") -> None:
        super().__init__(message)


class RegistrationInputMissing(PublisherError):
    """Raised by resolver adapters before any HTTP call is made."""

    code = "REGISTRATION_INPUT_MISSING"

    def __init__(self, field: str) -> None:
        if field == "links":
            message = "Failed to publish links: at least one link is required"
        else:
            message = f"Failed to publish links: {field} is required"
        super().__init__(message)
        self.field = field


class ResolverRegistrationError(PublisherError):
    """Registration against a link resolver failed after the request was attempted."""

    code = "RESOLVER_REGISTRATION_FAILED"

    def __init__(self, identifier: str, cause: str) -> None:
        cause = cause or "Unknown error"
        super().__init__(
            f"Failed to register links with identity resolver for identifier {identifier}: {cause}"
        )
        self.identifier = identifier
        self.cause = cause


class TransportFailure(ResolverRegistrationError):
    code = "RESOLVER_TRANSPORT_FAILURE"


class HttpStatusFailure(ResolverRegistrationError):
    code = "RESOLVER_HTTP_FAILURE"

    def __init__(self, identifier: str, status_code: int, reason: str) -> None:
        super().__init__(identifier, f"HTTP {status_code}: {reason}")
        self.status_code = status_code
        self.reason = reason


class ResolverQueryError(PublisherError):
    """Read-only resolver queries (description, link types) failed."""

    code = "RESOLVER_QUERY_FAILED"


class IssuanceError(PublisherError):
    code = "ISSUANCE_FAILED"


class StorageUploadError(PublisherError):
    code = "STORAGE_UPLOAD_FAILED"
