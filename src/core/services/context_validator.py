"""Validación del contexto por operación.

Por qué procedimental y en cortocircuito:
- El primer campo ausente determina el mensaje, y ese mensaje forma parte del
  contrato observable (los tests comparan el texto exacto).
- Nunca lanza: devuelve un `ValidationResult` y el orquestador decide.

Todos los tipos comparten el prefijo (vckit, storage, dlr, identifierKeyPath)
y luego revisan su bloque específico en el mismo orden fijo.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sized
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from core.domain.context import (
    CredentialTypeConfig,
    IssuanceConfig,
    LocalStorageParams,
    OperationContext,
    ResolverConfig,
    StorageConfig,
)
from core.domain.kinds import CredentialKind, KindDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Tagged result: `ok` with the typed context, or a single failure message."""

    ok: bool
    value: OperationContext | None = None
    message: str | None = None

    @classmethod
    def success(cls, value: OperationContext) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(ok=False, message=message)


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def _get(block: Any, key: str) -> Any:
    if isinstance(block, Mapping):
        return block.get(key)
    return None


def _first_missing(context: Mapping[str, Any], descriptor: KindDescriptor) -> str | None:
    block = descriptor.block
    vckit = context.get("vckit")
    storage = context.get("storage")
    dlr = context.get("dlr")
    credential = context.get(block)

    checks: list[tuple[Any, str]] = [
        (vckit, "Invalid vckit context"),
        (storage, "Invalid storage context"),
        (dlr, "Invalid dlr context"),
        (context.get("identifierKeyPath"), "identifierKeyPath not found"),
        (_get(vckit, "vckitAPIUrl"), "Invalid vckitAPIUrl"),
        (_get(vckit, "issuer"), "Invalid issuer"),
        (credential, f"Invalid {block} context"),
        (_get(credential, "context"), f"Invalid {block} context"),
        (_get(credential, "type"), descriptor.field_message("type")),
        (_get(credential, "dlrLinkTitle"), descriptor.field_message("dlrLinkTitle")),
        (_get(credential, "dlrVerificationPage"), descriptor.field_message("dlrVerificationPage")),
        (_get(storage, "url"), "Invalid storage url"),
        (_get(storage, "params"), "Invalid storage params"),
        (_get(dlr, "dlrAPIUrl"), "Invalid dlrAPIUrl"),
        (_get(dlr, "dlrAPIKey"), "Invalid dlrAPIKey"),
        (_get(dlr, "namespace"), "Invalid dlr namespace"),
    ]
    for value, message in checks:
        if is_empty(value):
            return message
    return None


def _build(model: type[BaseModel], name: str, raw: Any) -> Any:
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        err = exc.errors()[0]
        loc = ".".join(str(part) for part in (name, *err.get("loc", ())))
        raise ValueError(f"Invalid context: {loc}: {err.get('msg')}") from exc


def validate_context(kind: CredentialKind, context: Any) -> ValidationResult:
    """Check every field the publisher needs for `kind`, stopping at the first gap."""

    if not isinstance(context, Mapping):
        return ValidationResult.failure("Invalid vckit context")

    block = kind.descriptor.block
    missing = _first_missing(context, kind.descriptor)
    if missing is not None:
        logger.debug("Context rejected for %s: %s", kind.value, missing, extra={"kind": kind.value})
        return ValidationResult.failure(missing)

    try:
        local_params = None
        raw_local = context.get("localStorageParams")
        if kind.descriptor.cleanup_local_cache and not is_empty(raw_local):
            local_params = _build(LocalStorageParams, "localStorageParams", raw_local)

        typed = OperationContext(
            issuance=_build(IssuanceConfig, "vckit", context["vckit"]),
            credential=_build(CredentialTypeConfig, block, context[block]),
            storage=_build(StorageConfig, "storage", context["storage"]),
            resolver=_build(ResolverConfig, "dlr", context["dlr"]),
            identifier_key_path=context["identifierKeyPath"],
            local_storage_params=local_params,
        )
    except ValueError as exc:
        return ValidationResult.failure(str(exc))

    return ValidationResult.success(typed)


def build_validator(kind: CredentialKind) -> Callable[[Any], ValidationResult]:
    def _validate(context: Any) -> ValidationResult:
        return validate_context(kind, context)

    _validate.__name__ = f"validate_{kind.value}_context"
    return _validate


VALIDATORS: dict[CredentialKind, Callable[[Any], ValidationResult]] = {
    kind: build_validator(kind) for kind in CredentialKind
}
