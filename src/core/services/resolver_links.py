"""Construcción de enlaces para el resolver.

- `construct_verify_url`: página de verificación con la referencia de storage
  embebida como `?q=<json percent-encoded>`.
- `build_credential_links`: los tres enlaces canónicos de cada publicación.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from core.domain.models import JSON_MIME_TYPE, LinkDescriptor, StorageRecord

VERIFICATION_SERVICE_REL = "verificationService"
CERTIFICATION_INFO_REL = "certificationInfo"
VERIFICATION_SERVICE_TITLE = "VCKit verify service"

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"

# Caracteres que `encodeURIComponent` deja sin codificar (además de alfanuméricos).
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def construct_verify_url(
    verification_page: str,
    *,
    uri: str | None,
    key: str | None = None,
    hash: str | None = None,
) -> str:
    """Return the human verification URL for a stored credential.

    >>> construct_verify_url("http://localhost:3000/verify", uri="http://example.com/credential")
    'http://localhost:3000/verify?q=%7B%22payload%22%3A%7B%22uri%22%3A%22http%3A%2F%2Fexample.com%2Fcredential%22%7D%7D'
    """

    if not uri:
        raise ValueError("URI is required")

    payload: dict[str, Any] = {"uri": uri}
    if key:
        payload["key"] = key
    if hash:
        payload["hash"] = hash

    query = encode_uri_component(json.dumps({"payload": payload}, separators=(",", ":"), ensure_ascii=False))
    separator = "&" if "?" in verification_page else "?"
    return f"{verification_page}{separator}q={query}"


def build_credential_links(
    *,
    record: StorageRecord,
    verify_url: str,
    verification_page: str,
    link_title: str,
) -> list[LinkDescriptor]:
    """Verification service, raw credential, and the default human page."""

    return [
        LinkDescriptor(
            href=verification_page,
            rel=VERIFICATION_SERVICE_REL,
            type=TEXT_PLAIN,
            title=VERIFICATION_SERVICE_TITLE,
        ),
        LinkDescriptor(
            href=record.uri,
            rel=CERTIFICATION_INFO_REL,
            type=JSON_MIME_TYPE,
            title=link_title,
        ),
        LinkDescriptor(
            href=verify_url,
            rel=CERTIFICATION_INFO_REL,
            type=TEXT_HTML,
            title=link_title,
            default=True,
        ),
    ]
