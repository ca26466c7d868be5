"""Selección del adaptador a partir del bloque `dlr` del contexto."""

from __future__ import annotations

import httpx

from adapters.link_resolvers.legacy_dlr import LegacyDLRResolver
from adapters.link_resolvers.pyx_idr import PyxIDRResolver
from core.config import AppSettings
from core.domain.context import ResolverConfig
from core.interfaces.resolver import LinkResolverRegistrar


def build_link_resolver(
    config: ResolverConfig,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> LinkResolverRegistrar:
    if config.type == "PYX_IDR":
        return PyxIDRResolver(
            base_url=config.dlr_api_url,
            headers={"Authorization": f"Bearer {config.dlr_api_key}"},
            namespace=config.namespace,
            context=config.default_context,
            item_description=config.item_description,
            default_flags=config.default_flags,
            settings=settings,
            transport=transport,
        )
    return LegacyDLRResolver(
        base_url=config.dlr_api_url,
        api_key=config.dlr_api_key,
        namespace=config.namespace,
        item_description=config.item_description,
        settings=settings,
        transport=transport,
    )
