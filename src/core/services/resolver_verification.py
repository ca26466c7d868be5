"""Comprobaciones (advisory) sobre un resolver antes de confiar en él."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from core.domain.models import LinkTypeInfo, ResolverDescription, VerificationWarning

REQUIRED_UNTP_LINK_TYPES: tuple[str, ...] = ("untp:dpp", "untp:dcc", "untp:dte", "untp:idr")


def verify_resolver_description(description: ResolverDescription | Mapping[str, Any] | None) -> bool:
    """True iff the description carries a non-empty string `name`."""

    if description is None:
        return False
    if isinstance(description, ResolverDescription):
        name = description.name
    else:
        name = description.get("name")
    return isinstance(name, str) and len(name) > 0


def _qualified(item: LinkTypeInfo | Mapping[str, Any]) -> str | None:
    if isinstance(item, LinkTypeInfo):
        return item.qualified
    namespace, type_ = item.get("namespace"), item.get("type")
    if namespace is None or type_ is None:
        return None
    return f"{namespace}:{type_}"


def verify_untp_link_types(
    link_types: Iterable[LinkTypeInfo | Mapping[str, Any]] | None,
) -> list[VerificationWarning]:
    """Return one warning per required UNTP link type the resolver does not advertise."""

    advertised = {q for q in (_qualified(item) for item in (link_types or ())) if q}
    return [
        VerificationWarning(
            message=f"Resolver does not advertise required link type {required}",
        )
        for required in REQUIRED_UNTP_LINK_TYPES
        if required not in advertised
    ]
