"""Shared fixtures: isolated settings, sample contexts and an HTTP recorder."""

from __future__ import annotations

import json
import os
from typing import Any, Callable

import httpx
import pytest

from core.config import AppSettings

GTIN_URL = "https://id.example.com/01/09359502000034/10/LOT-7"


@pytest.fixture(autouse=True)
def _isolated_user_config(tmp_path, monkeypatch):
    """Keep AppSettings away from the developer's real user config."""

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    for key in list(os.environ):
        if key.startswith("UNTP_PUBLISHER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(_env_file=None, data_dir=tmp_path / "cache", http_timeout_seconds=5)


def make_context(block: str = "dpp", **overrides: Any) -> dict[str, Any]:
    ctx: dict[str, Any] = {
        "vckit": {
            "vckitAPIUrl": "https://vckit.example.com",
            "issuer": "did:web:issuer.example.com",
        },
        block: {
            "context": ["https://test.uncefact.org/vocabulary/untp/dpp/0.5.0/"],
            "type": ["DigitalProductPassport"],
            "renderTemplate": [{"template": "<div>{{name}}</div>"}],
            "dlrLinkTitle": "Product Passport",
            "dlrVerificationPage": "https://verify.example.com/verify",
        },
        "storage": {
            "url": "https://storage.example.com/api/v1/credentials",
            "params": {"bucket": "verifiable-credentials"},
        },
        "dlr": {
            "dlrAPIUrl": "https://dlr.example.com",
            "dlrAPIKey": "secret-key",
            "namespace": "gs1",
        },
        "identifierKeyPath": "/product/digitalLink",
    }
    ctx.update(overrides)
    return ctx


def make_payload() -> dict[str, Any]:
    return {"data": {"product": {"name": "Widget", "digitalLink": GTIN_URL}}}


class Recorder:
    """Collects requests seen by an `httpx.MockTransport`."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder_factory() -> Callable[..., Recorder]:
    def _make(
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        *,
        status_code: int = 200,
        body: Any = None,
    ) -> Recorder:
        if handler is None:
            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, json=body if body is not None else {})

        return Recorder(handler)

    return _make
