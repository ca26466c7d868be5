"""Adaptador: Pyx Identity Resolver (IDR).

A diferencia del Legacy DLR:
- acepta cualquier lista de enlaces y respeta `hreflang`/`context` por enlace;
- `link.default` sólo activa los flags que el adaptador tiene habilitados en
  `DefaultFlags` (todos False por defecto), para que un registro no se
  convierta en el default global del identificador;
- expone lectura de la auto-descripción y del vocabulario de link types.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import httpx

from adapters.http_client import build_async_client, response_reason
from adapters.link_resolvers.base import DEFAULT_LANGUAGE, DEFAULT_QUALIFIER_PATH, BaseLinkResolver
from core.config import AppSettings
from core.domain.models import (
    DefaultFlags,
    LinkDescriptor,
    LinkResponse,
    LinkTypeInfo,
    ResolverDescription,
)
from core.errors import ResolverQueryError

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT = "au"


class PyxIDRResolver(BaseLinkResolver):
    kind = "PYX_IDR"

    def __init__(
        self,
        *,
        base_url: str,
        headers: Mapping[str, str],
        namespace: str,
        context: str | None = None,
        item_description: str | None = None,
        default_flags: DefaultFlags | None = None,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("Error creating PyxIDRResolver. API URL is required.")
        if not namespace:
            raise ValueError("Error creating PyxIDRResolver. namespace is required.")
        if not headers or not headers.get("Authorization"):
            raise ValueError("Error creating PyxIDRResolver. Authorization header is required.")

        super().__init__(
            base_url=base_url,
            namespace=namespace,
            item_description=item_description,
            settings=settings,
            transport=transport,
        )
        self._headers = dict(headers)
        self.context = context or DEFAULT_CONTEXT
        self.default_flags = default_flags or DefaultFlags()

    def _auth_headers(self) -> dict[str, str]:
        return dict(self._headers)

    def _build_responses(self, links: Sequence[LinkDescriptor]) -> list[LinkResponse]:
        flags = self.default_flags
        responses: list[LinkResponse] = []
        for link in links:
            is_default = bool(link.default)
            responses.append(
                LinkResponse(
                    link_type=self.link_type(link.rel),
                    target_url=link.href,
                    mime_type=self.mime_type(link),
                    title=link.title,
                    iana_language=(link.hreflang[0] if link.hreflang else "") or DEFAULT_LANGUAGE,
                    context=link.context or self.context,
                    active=True,
                    default_link_type=is_default and flags.default_link_type,
                    default_iana_language=is_default and flags.default_iana_language,
                    default_context=is_default and flags.default_context,
                    default_mime_type=is_default and flags.default_mime_type,
                    fwqs=flags.fwqs,
                )
            )
        return responses

    def resolver_uri(self, identifier_scheme: str, identifier: str, qualifier_path: str | None) -> str:
        uri = f"{self.base_url}/{self.namespace}/{identifier_scheme}/{identifier}"
        if qualifier_path and qualifier_path != DEFAULT_QUALIFIER_PATH:
            uri += qualifier_path if qualifier_path.startswith("/") else f"/{qualifier_path}"
        return uri

    async def _get_json(self, url: str, what: str) -> Any:
        try:
            async with build_async_client(
                self._settings, extra_headers=self._auth_headers(), transport=self._transport
            ) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ResolverQueryError(f"Failed to get {what}: {str(exc) or 'Unknown error'}") from exc

        if not response.is_success:
            raise ResolverQueryError(
                f"Failed to get {what}: HTTP {response.status_code}: {response_reason(response)}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ResolverQueryError(f"Failed to get {what}: invalid JSON body") from exc

    async def get_resolver_description(self) -> ResolverDescription:
        """GET `/.well-known/resolver`."""

        logger.info("Fetching resolver description", extra={"resolver": self.kind})
        data = await self._get_json(f"{self.base_url}/.well-known/resolver", "resolver description")
        if not isinstance(data, dict):
            raise ResolverQueryError("Failed to get resolver description: unexpected body")
        return ResolverDescription.model_validate(data)

    async def get_link_types(self) -> list[LinkTypeInfo]:
        """GET `/voc?show=linktypes`; acepta lista o mapa `{"ns:type": {...}}`."""

        logger.info("Fetching link types", extra={"resolver": self.kind})
        data = await self._get_json(f"{self.base_url}/voc?show=linktypes", "link types")

        items: list[LinkTypeInfo] = []
        if isinstance(data, list):
            for raw in data:
                if isinstance(raw, dict) and raw.get("namespace") and raw.get("type"):
                    items.append(LinkTypeInfo.model_validate(raw))
        elif isinstance(data, dict):
            for qualified, raw in data.items():
                namespace, _, type_ = str(qualified).partition(":")
                if not type_:
                    continue
                title = raw.get("title") if isinstance(raw, dict) else None
                items.append(LinkTypeInfo(namespace=namespace, type=type_, title=title))
        return items
