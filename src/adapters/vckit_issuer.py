"""Emisor de credenciales vía API VCKit.

`POST {apiURL}/credentials/issue` con el contexto W3C v2 y el tipo
`VerifiableCredential` añadidos; devuelve `verifiableCredential`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

import httpx

from adapters.http_client import build_async_client, response_reason
from core.config import AppSettings
from core.errors import IssuanceError
from core.interfaces.collaborators import IssueRequest

logger = logging.getLogger(__name__)

W3C_CREDENTIALS_V2 = "https://www.w3.org/ns/credentials/v2"
VERIFIABLE_CREDENTIAL = "VerifiableCredential"
PROOF_FORMAT = "EnvelopingProofJose"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_instant(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        value = raw
    else:
        value = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def validate_headers(headers: Any) -> dict[str, str]:
    if not isinstance(headers, Mapping) or not all(isinstance(v, str) for v in headers.values()):
        raise IssuanceError("VcKit headers defined in app config must be a plain object with string values")
    return {str(k): v for k, v in headers.items()}


def build_issue_body(request: IssueRequest, valid_from: datetime) -> dict[str, Any]:
    credential: dict[str, Any] = {
        "@context": [W3C_CREDENTIALS_V2, *(request.context or [])],
        "type": [*(request.type or []), VERIFIABLE_CREDENTIAL],
        "issuer": request.issuer,
        "credentialSubject": request.credential_subject,
        "validFrom": valid_from.isoformat().replace("+00:00", "Z"),
    }
    credential.update({k: v for k, v in request.rest_of_vc.items() if v is not None})
    return {"credential": credential, "options": {"proofFormat": PROOF_FORMAT}}


class VCKitIssuer:
    """Implementa `CredentialIssuer` contra una instancia VCKit."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def issue(self, request: IssueRequest) -> dict[str, Any]:
        headers = validate_headers(request.headers) if request.headers is not None else {}

        valid_from = _now()
        valid_until = request.rest_of_vc.get("validUntil")
        if valid_until:
            try:
                expires = _parse_instant(valid_until)
            except ValueError as exc:
                raise IssuanceError(f"Invalid validUntil value: {exc}") from exc
            if expires < valid_from:
                raise IssuanceError(
                    "Invalid validUntil value: Invalid validity period: "
                    "validUntil must be after or equal to validFrom"
                )

        body = build_issue_body(request, valid_from)
        url = f"{request.api_url.rstrip('/')}/credentials/issue"
        try:
            async with build_async_client(
                self._settings, extra_headers=headers, transport=self._transport
            ) as client:
                response = await client.post(url, json=body)
        except httpx.HTTPError as exc:
            raise IssuanceError(f"Failed to issue credential: {str(exc) or 'Unknown error'}") from exc

        if not response.is_success:
            raise IssuanceError(
                f"Failed to issue credential: HTTP {response.status_code}: {response_reason(response)}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise IssuanceError("Failed to issue credential: invalid JSON body") from exc
        credential = data.get("verifiableCredential") if isinstance(data, dict) else None
        if not isinstance(credential, dict):
            raise IssuanceError("Failed to issue credential: response has no verifiableCredential")

        logger.debug("Issued credential of type %s", credential.get("type"))
        return credential
