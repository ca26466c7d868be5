"""Adaptadores de link resolver (Legacy DLR, Pyx IDR)."""

from adapters.link_resolvers.base import BaseLinkResolver
from adapters.link_resolvers.factory import build_link_resolver
from adapters.link_resolvers.legacy_dlr import LegacyDLRResolver
from adapters.link_resolvers.pyx_idr import PyxIDRResolver

__all__ = [
    "BaseLinkResolver",
    "LegacyDLRResolver",
    "PyxIDRResolver",
    "build_link_resolver",
]
