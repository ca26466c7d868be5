"""Tipos de credencial/evento soportados.

Este módulo centraliza la tabla de variantes: qué bloque del contexto usa
cada tipo, si decodifica credenciales "enveloped", si limpia la caché local y
cómo se construye la clave de almacenamiento. El orquestador es único y se
parametriza con estos descriptores.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CredentialKind(str, Enum):
    """Credential and event kinds the publisher knows how to sequence."""

    DIGITAL_PRODUCT_PASSPORT = "digital_product_passport"
    DIGITAL_CONFORMITY_CREDENTIAL = "digital_conformity_credential"
    DIGITAL_FACILITY_RECORD = "digital_facility_record"
    DIGITAL_IDENTITY_ANCHOR = "digital_identity_anchor"
    OBJECT_EVENT = "object_event"
    AGGREGATION_EVENT = "aggregation_event"
    TRANSACTION_EVENT = "transaction_event"
    TRANSFORMATION_EVENT = "transformation_event"
    ASSOCIATION_EVENT = "association_event"

    @property
    def descriptor(self) -> "KindDescriptor":
        return KIND_DESCRIPTORS[self]

    @classmethod
    def parse(cls, raw: str) -> "CredentialKind":
        """Accept the enum value, its name, or the context block name."""

        token = raw.strip()
        for kind in cls:
            if token in (kind.value, kind.name, kind.name.lower(), kind.descriptor.block):
                return kind
        raise ValueError(f"Unknown credential kind: {raw}")


@dataclass(frozen=True)
class KindDescriptor:
    block: str
    label: str
    decode_enveloped: bool = False
    cleanup_local_cache: bool = False
    identifier_storage_key: bool = False
    # None: mensajes de campo con el nombre del bloque; "" los deja sin prefijo.
    field_message_prefix: str | None = None

    def field_message(self, field: str) -> str:
        prefix = self.block if self.field_message_prefix is None else self.field_message_prefix
        return f"Invalid {prefix} {field}" if prefix else f"Invalid {field}"


KIND_DESCRIPTORS: dict[CredentialKind, KindDescriptor] = {
    CredentialKind.DIGITAL_PRODUCT_PASSPORT: KindDescriptor(
        block="dpp",
        label="DPP",
        decode_enveloped=True,
        cleanup_local_cache=True,
        identifier_storage_key=True,
        field_message_prefix="",
    ),
    CredentialKind.DIGITAL_CONFORMITY_CREDENTIAL: KindDescriptor(
        block="digitalConformityCredential",
        label="digitalConformityCredential",
        decode_enveloped=True,
    ),
    CredentialKind.DIGITAL_FACILITY_RECORD: KindDescriptor(
        block="digitalFacilityRecord",
        label="digitalFacilityRecord",
        decode_enveloped=True,
        field_message_prefix="",
    ),
    CredentialKind.DIGITAL_IDENTITY_ANCHOR: KindDescriptor(
        block="digitalIdentityAnchor",
        label="digitalIdentityAnchor",
        decode_enveloped=True,
        field_message_prefix="",
    ),
    CredentialKind.OBJECT_EVENT: KindDescriptor(
        block="epcisObjectEvent",
        label="Object event",
    ),
    CredentialKind.AGGREGATION_EVENT: KindDescriptor(
        block="epcisAggregationEvent",
        label="Aggregation event",
    ),
    CredentialKind.TRANSACTION_EVENT: KindDescriptor(
        block="epcisTransactionEvent",
        label="Transaction event",
    ),
    CredentialKind.TRANSFORMATION_EVENT: KindDescriptor(
        block="epcisTransformationEvent",
        label="Transformation event",
        decode_enveloped=True,
    ),
    CredentialKind.ASSOCIATION_EVENT: KindDescriptor(
        block="epcisAssociationEvent",
        label="Association event",
        decode_enveloped=True,
    ),
}
