"""Enveloped credential decoding tests."""

from __future__ import annotations

import base64
import json

from core.services.enveloped import decode_enveloped_credential


def _segment(obj: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(obj).encode()).decode().rstrip("=")


def _jwt(payload: dict) -> str:
    return f"{_segment({'alg': 'ES256'})}.{_segment(payload)}.c2ln"


def test_decodes_payload_of_enveloped_credential():
    vc = {
        "@context": ["https://www.w3.org/ns/credentials/v2"],
        "type": "EnvelopedVerifiableCredential",
        "id": f"data:application/vc+jwt,{_jwt({'type': ['VerifiableCredential'], 'issuer': 'did:web:x'})}",
    }

    assert decode_enveloped_credential(vc) == {"type": ["VerifiableCredential"], "issuer": "did:web:x"}


def test_non_enveloped_returns_none():
    assert decode_enveloped_credential({"type": ["VerifiableCredential"]}) is None
    assert decode_enveloped_credential(None) is None


def test_garbage_is_logged_and_returns_none(caplog):
    vc = {"type": "EnvelopedVerifiableCredential", "id": "data:application/vc+jwt,not-a-jwt"}

    assert decode_enveloped_credential(vc) is None
    assert "Error decoding enveloped VC" in caplog.text

    assert decode_enveloped_credential({"type": "EnvelopedVerifiableCredential", "id": "no-comma"}) is None
