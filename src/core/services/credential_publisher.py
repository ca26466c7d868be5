"""Orquestación de la publicación de credenciales.

Un único pipeline para los nueve tipos (DPP, DCC, DFR, DIA y eventos EPCIS),
parametrizado por `KindDescriptor`:

validar contexto -> resolver identificador -> emitir -> (decodificar) ->
subir -> verify URL -> registrar en el resolver -> (limpiar caché local)

Los pasos son estrictamente secuenciales; cualquier error de un colaborador se
propaga sin reintentos ni compensación.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from adapters.link_resolvers import build_link_resolver
from core.config import AppSettings
from core.domain.context import OperationContext, ResolverConfig
from core.domain.kinds import CredentialKind, KindDescriptor
from core.domain.models import Identifier, PublishResult, StorageRecord
from core.errors import IdentifierNotFound, InvalidContext, PayloadDataMissing
from core.interfaces.collaborators import CredentialIssuer, DocumentStorage, IssueRequest, LocalCache
from core.interfaces.resolver import LinkResolverRegistrar
from core.services.context_validator import is_empty, validate_context
from core.services.enveloped import decode_enveloped_credential
from core.services.identifier_scheme import construct_identifier_data, construct_qualifier_path
from core.services.resolver_links import build_credential_links, construct_verify_url

logger = logging.getLogger(__name__)

ResolverFactory = Callable[[ResolverConfig], LinkResolverRegistrar]


@dataclass
class PublisherCollaborators:
    """External services the pipeline talks to."""

    issuer: CredentialIssuer
    storage: DocumentStorage
    local_cache: LocalCache | None = None
    resolver_factory: ResolverFactory | None = None


def storage_key_for(descriptor: KindDescriptor, identifier: Identifier, qualifier_path: str) -> str:
    if descriptor.identifier_storage_key:
        return f"{identifier.primary.value}/{qualifier_path}"
    return str(uuid.uuid4())


def _normalise_record(reference: str | StorageRecord | Mapping[str, Any]) -> StorageRecord:
    if isinstance(reference, StorageRecord):
        return reference
    if isinstance(reference, str):
        return StorageRecord(uri=reference)
    return StorageRecord.model_validate(dict(reference))


class CredentialPublisher:
    """Runs the publish pipeline for any `CredentialKind`."""

    def __init__(self, collaborators: PublisherCollaborators, settings: AppSettings | None = None) -> None:
        self._collaborators = collaborators
        self._settings = settings or AppSettings()

    def _resolver_for(self, config: ResolverConfig) -> LinkResolverRegistrar:
        factory = self._collaborators.resolver_factory
        if factory is not None:
            return factory(config)
        return build_link_resolver(config, settings=self._settings)

    async def publish(
        self,
        kind: CredentialKind,
        payload: Mapping[str, Any],
        context: Mapping[str, Any],
    ) -> PublishResult:
        descriptor = kind.descriptor
        log_extra: dict[str, Any] = {"kind": kind.value}

        validation = validate_context(kind, context)
        if not validation.ok or validation.value is None:
            raise InvalidContext(validation.message or "Invalid context")
        ctx: OperationContext = validation.value

        data = payload.get("data") if isinstance(payload, Mapping) else None
        if is_empty(data):
            raise PayloadDataMissing(descriptor.label)

        identifier = construct_identifier_data(ctx.identifier_key_path, data)
        if not identifier.primary.ai or not identifier.primary.value:
            raise IdentifierNotFound()
        qualifier_path = construct_qualifier_path(identifier.qualifiers)
        log_extra["identifier"] = identifier.primary.value
        logger.info("Publishing %s", descriptor.block, extra=log_extra)

        key = storage_key_for(descriptor, identifier, qualifier_path)
        rest_of_vc: dict[str, Any] = {}
        if ctx.credential.render_template is not None:
            rest_of_vc["render"] = ctx.credential.render_template
        if not descriptor.identifier_storage_key:
            rest_of_vc["id"] = f"urn:uuid:{key}"
        if ctx.credential.valid_until:
            rest_of_vc["validUntil"] = ctx.credential.valid_until

        credential = await self._collaborators.issuer.issue(
            IssueRequest(
                credential_subject=data,
                issuer=ctx.issuance.issuer,
                context=list(ctx.credential.context),
                type=list(ctx.credential.type),
                api_url=ctx.issuance.vckit_api_url,
                rest_of_vc=rest_of_vc,
                headers=ctx.issuance.headers,
            )
        )
        logger.info("Credential issued", extra=log_extra)

        decoded = decode_enveloped_credential(credential) if descriptor.decode_enveloped else None

        reference = await self._collaborators.storage.upload(ctx.storage, credential, key)
        record = _normalise_record(reference)
        logger.info("Credential stored at %s", record.uri, extra=log_extra)

        verification_page = ctx.credential.dlr_verification_page
        verify_url = construct_verify_url(
            verification_page,
            uri=record.uri,
            key=record.key,
            hash=record.hash,
        )
        links = build_credential_links(
            record=record,
            verify_url=verify_url,
            verification_page=verification_page,
            link_title=ctx.credential.dlr_link_title,
        )

        resolver = self._resolver_for(ctx.resolver)
        registration = await resolver.register(
            identifier.primary.ai,
            identifier.primary.value,
            links,
            qualifier_path,
            item_description=ctx.credential.dlr_link_title,
        )
        logger.info("Registered resolver entry %s", registration.resolver_uri, extra=log_extra)

        if descriptor.cleanup_local_cache:
            self._cleanup(ctx, log_extra)

        return PublishResult(
            credential=credential,
            decoded_credential=decoded,
            resolver_uri=registration.resolver_uri,
        )

    def _cleanup(self, ctx: OperationContext, log_extra: dict[str, Any]) -> None:
        params = ctx.local_storage_params
        cache = self._collaborators.local_cache
        if params is None or cache is None:
            return
        cache.delete_values(params.storage_key, params.keys)
        logger.info("Cleared local cache entry %s", params.storage_key, extra=log_extra)


async def publish_credential(
    kind: CredentialKind,
    payload: Mapping[str, Any],
    context: Mapping[str, Any],
    collaborators: PublisherCollaborators,
    settings: AppSettings | None = None,
) -> PublishResult:
    """Functional entry point: one publish run for `kind`."""

    return await CredentialPublisher(collaborators, settings).publish(kind, payload, context)
