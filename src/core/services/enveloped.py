"""Decodificación de credenciales "enveloped".

Una `EnvelopedVerifiableCredential` lleva el JWT en el `id` como data URL
(`data:application/vc+jwt,<jwt>`). Sólo se decodifica el payload; la firma la
verifica el servicio de emisión, no este paquete.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)

ENVELOPED_TYPE = "EnvelopedVerifiableCredential"


def _b64url_decode(segment: str) -> bytes:
    pad = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + pad)


def decode_jwt_payload(token: str) -> dict[str, Any]:
    parts = token.split(".")
    if len(parts) < 2:
        raise ValueError("Invalid JWT: expected header.payload.signature")
    payload = json.loads(_b64url_decode(parts[1]))
    if not isinstance(payload, dict):
        raise ValueError("Invalid JWT: payload is not an object")
    return payload


def decode_enveloped_credential(credential: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Best-effort decode; returns None for non-enveloped input or on failure."""

    if not isinstance(credential, Mapping) or credential.get("type") != ENVELOPED_TYPE:
        return None
    try:
        _, token = str(credential.get("id") or "").split(",", 1)
        return decode_jwt_payload(token)
    except (ValueError, TypeError) as exc:
        logger.warning("Error decoding enveloped VC: %s", exc)
        return None
