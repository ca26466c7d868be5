"""Adaptador: Legacy DLR.

- Cada enlace se duplica para las regiones fijas `us` y `au`, idioma `en`.
- `link.default` marca linkType, idioma y mime como default; nunca el contexto.
- La URI devuelta se sintetiza en el cliente (el cuerpo de la respuesta del
  servidor no se usa).
"""

from __future__ import annotations

from typing import Sequence

import httpx

from adapters.link_resolvers.base import DEFAULT_LANGUAGE, BaseLinkResolver
from core.config import AppSettings
from core.domain.models import LinkDescriptor, LinkResponse

REGIONS: tuple[str, ...] = ("us", "au")


class LegacyDLRResolver(BaseLinkResolver):
    kind = "DLR"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        namespace: str,
        item_description: str | None = None,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("Error creating LegacyDLRResolver. API URL is required.")
        super().__init__(
            base_url=base_url,
            namespace=namespace,
            item_description=item_description,
            settings=settings,
            transport=transport,
        )
        self._api_key = api_key

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _build_responses(self, links: Sequence[LinkDescriptor]) -> list[LinkResponse]:
        responses: list[LinkResponse] = []
        for link in links:
            is_default = bool(link.default)
            for region in REGIONS:
                responses.append(
                    LinkResponse(
                        link_type=self.link_type(link.rel),
                        target_url=link.href,
                        mime_type=self.mime_type(link),
                        title=link.title,
                        iana_language=DEFAULT_LANGUAGE,
                        context=region,
                        active=True,
                        default_link_type=is_default,
                        default_iana_language=is_default,
                        default_context=False,
                        default_mime_type=is_default,
                        fwqs=False,
                    )
                )
        return responses

    def resolver_uri(self, identifier_scheme: str, identifier: str, qualifier_path: str | None) -> str:
        # Best-effort: misma forma que expone el resolver para linkType=all.
        return f"{self.base_url}/{identifier_scheme}/{identifier}?linkType=all"
