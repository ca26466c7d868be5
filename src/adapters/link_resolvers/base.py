"""Esqueleto común de los adaptadores de link resolver.

Por qué una base:
- Validación de entrada, POST y envoltura de errores son idénticos en ambos
  protocolos; sólo cambian el payload, la auth y la URI devuelta.
- Cada subclase implementa `_build_responses`, `_auth_headers` y
  `resolver_uri`.
"""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from adapters.http_client import build_async_client, response_reason
from core.config import AppSettings
from core.domain.models import (
    JSON_MIME_TYPE,
    LinkDescriptor,
    LinkRegistration,
    LinkResolverRegistration,
    LinkResponse,
)
from core.errors import HttpStatusFailure, RegistrationInputMissing, TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
DEFAULT_QUALIFIER_PATH = "/"


class BaseLinkResolver:
    """Template para `register(...)`; no se instancia directamente."""

    kind = "base"

    def __init__(
        self,
        *,
        base_url: str,
        namespace: str,
        item_description: str | None = None,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.namespace = namespace
        self.item_description = item_description
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def register_url(self) -> str:
        return f"{self.base_url}/resolver"

    def link_type(self, rel: str) -> str:
        return rel if ":" in rel else f"{self.namespace}:{rel}"

    @staticmethod
    def mime_type(link: LinkDescriptor) -> str:
        return link.type or JSON_MIME_TYPE

    def _build_responses(self, links: Sequence[LinkDescriptor]) -> list[LinkResponse]:
        raise NotImplementedError

    def _auth_headers(self) -> dict[str, str]:
        raise NotImplementedError

    def resolver_uri(self, identifier_scheme: str, identifier: str, qualifier_path: str | None) -> str:
        raise NotImplementedError

    def build_registration(
        self,
        identifier_scheme: str,
        identifier: str,
        links: Sequence[LinkDescriptor],
        qualifier_path: str | None = None,
        *,
        item_description: str | None = None,
    ) -> LinkResolverRegistration:
        return LinkResolverRegistration(
            namespace=self.namespace,
            identification_key_type=identifier_scheme,
            identification_key=identifier,
            item_description=item_description or self.item_description or links[0].title,
            qualifier_path=qualifier_path or DEFAULT_QUALIFIER_PATH,
            active=True,
            responses=self._build_responses(links),
        )

    async def register(
        self,
        identifier_scheme: str,
        identifier: str,
        links: Sequence[LinkDescriptor],
        qualifier_path: str | None = None,
        *,
        item_description: str | None = None,
    ) -> LinkRegistration:
        if not identifier_scheme:
            raise RegistrationInputMissing("identifierScheme")
        if not identifier:
            raise RegistrationInputMissing("identifier")
        if not links:
            raise RegistrationInputMissing("links")

        registration = self.build_registration(
            identifier_scheme,
            identifier,
            links,
            qualifier_path,
            item_description=item_description,
        )
        await self._post(identifier, registration)

        logger.info(
            "Registered %d response(s) for %s/%s",
            len(registration.responses),
            identifier_scheme,
            identifier,
            extra={"identifier": identifier, "resolver": self.kind},
        )
        return LinkRegistration(
            resolver_uri=self.resolver_uri(identifier_scheme, identifier, qualifier_path),
            identifier_scheme=identifier_scheme,
            identifier=identifier,
        )

    async def _post(self, identifier: str, registration: LinkResolverRegistration) -> None:
        headers = {"Content-Type": "application/json", **self._auth_headers()}
        try:
            async with build_async_client(
                self._settings, extra_headers=headers, transport=self._transport
            ) as client:
                response = await client.post(self.register_url, json=registration.to_wire())
        # httpx.InvalidURL and invalid-header errors are not HTTPError subclasses.
        except Exception as exc:
            logger.warning(
                "Resolver transport failure: %s",
                exc,
                extra={"identifier": identifier, "resolver": self.kind},
            )
            raise TransportFailure(identifier, str(exc)) from exc

        if not response.is_success:
            logger.warning(
                "Resolver rejected registration",
                extra={"identifier": identifier, "resolver": self.kind, "status_code": response.status_code},
            )
            raise HttpStatusFailure(identifier, response.status_code, response_reason(response))
