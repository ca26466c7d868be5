"""Legacy DLR adapter tests.

Covers:
- Payload shape: three links fanned out to us/au, language en
- Default flags driven by link.default, defaultContext always false
- Bearer auth, POST target, synthesized resolver URI
- Input checks before any request, HTTP/transport error wrapping
"""

from __future__ import annotations

import httpx
import pytest

from adapters.link_resolvers import LegacyDLRResolver
from core.domain.models import LinkDescriptor
from core.errors import HttpStatusFailure, RegistrationInputMissing, TransportFailure
from core.services.resolver_links import build_credential_links
from core.domain.models import StorageRecord


def _links() -> list[LinkDescriptor]:
    return build_credential_links(
        record=StorageRecord(uri="https://storage.example.com/vc.json"),
        verify_url="https://verify.example.com/verify?q=abc",
        verification_page="https://verify.example.com/verify",
        link_title="Product Passport",
    )


def _resolver(settings, transport) -> LegacyDLRResolver:
    return LegacyDLRResolver(
        base_url="https://dlr.example.com/",
        api_key="secret-key",
        namespace="gs1",
        settings=settings,
        transport=transport,
    )


@pytest.mark.asyncio
async def test_register_builds_localized_payload(settings, recorder_factory):
    recorder = recorder_factory(status_code=201)
    resolver = _resolver(settings, recorder.transport)

    registration = await resolver.register("01", "09359502000034", _links(), "/10/LOT1")

    request = recorder.last
    assert request.method == "POST"
    assert str(request.url) == "https://dlr.example.com/resolver"
    assert request.headers["Authorization"] == "Bearer secret-key"
    assert request.headers["Content-Type"] == "application/json"

    body = recorder.last_json()
    assert list(body) == [
        "namespace",
        "identificationKeyType",
        "identificationKey",
        "itemDescription",
        "qualifierPath",
        "active",
        "responses",
    ]
    assert body["namespace"] == "gs1"
    assert body["identificationKeyType"] == "01"
    assert body["identificationKey"] == "09359502000034"
    assert body["itemDescription"] == "VCKit verify service"
    assert body["qualifierPath"] == "/10/LOT1"
    assert body["active"] is True

    responses = body["responses"]
    assert len(responses) == 6
    assert [r["context"] for r in responses] == ["us", "au"] * 3
    assert {r["ianaLanguage"] for r in responses} == {"en"}
    assert [r["linkType"] for r in responses[::2]] == [
        "gs1:verificationService",
        "gs1:certificationInfo",
        "gs1:certificationInfo",
    ]
    assert [r["mimeType"] for r in responses[::2]] == ["text/plain", "application/json", "text/html"]
    assert responses[0]["title"] == "VCKit verify service"

    for response in responses[:4]:
        assert response["defaultLinkType"] is False
        assert response["defaultMimeType"] is False
    for response in responses[4:]:
        assert response["defaultLinkType"] is True
        assert response["defaultIanaLanguage"] is True
        assert response["defaultMimeType"] is True
    assert all(r["defaultContext"] is False and r["fwqs"] is False for r in responses)

    assert registration.resolver_uri == "https://dlr.example.com/01/09359502000034?linkType=all"
    assert registration.identifier_scheme == "01"
    assert registration.identifier == "09359502000034"


@pytest.mark.asyncio
async def test_item_description_and_default_qualifier_path(settings, recorder_factory):
    recorder = recorder_factory()
    resolver = _resolver(settings, recorder.transport)

    await resolver.register("01", "123", _links(), item_description="Product Passport")

    body = recorder.last_json()
    assert body["itemDescription"] == "Product Passport"
    assert body["qualifierPath"] == "/"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "scheme, identifier, links, message",
    [
        ("", "123", "links", "Failed to publish links: identifierScheme is required"),
        ("01", "", "links", "Failed to publish links: identifier is required"),
        ("01", "123", [], "Failed to publish links: at least one link is required"),
    ],
)
async def test_missing_input_fails_before_http(settings, recorder_factory, scheme, identifier, links, message):
    recorder = recorder_factory()
    resolver = _resolver(settings, recorder.transport)

    with pytest.raises(RegistrationInputMissing) as excinfo:
        await resolver.register(scheme, identifier, _links() if links == "links" else links)

    assert str(excinfo.value) == message
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_http_500_is_wrapped(settings, recorder_factory):
    recorder = recorder_factory(status_code=500)
    resolver = _resolver(settings, recorder.transport)

    with pytest.raises(HttpStatusFailure) as excinfo:
        await resolver.register("01", "123", _links())

    assert str(excinfo.value) == (
        "Failed to register links with identity resolver for identifier 123: "
        "HTTP 500: Internal Server Error"
    )
    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_transport_error_is_wrapped(settings, recorder_factory):
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    resolver = _resolver(settings, recorder_factory(boom).transport)

    with pytest.raises(TransportFailure) as excinfo:
        await resolver.register("01", "123", _links())

    assert str(excinfo.value).endswith("for identifier 123: connection refused")


@pytest.mark.asyncio
async def test_transport_error_without_text_is_unknown(settings, recorder_factory):
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("", request=request)

    resolver = _resolver(settings, recorder_factory(boom).transport)

    with pytest.raises(TransportFailure) as excinfo:
        await resolver.register("01", "123", _links())

    assert str(excinfo.value).endswith(": Unknown error")


def test_base_url_is_required():
    with pytest.raises(ValueError):
        LegacyDLRResolver(base_url="", api_key="k", namespace="gs1")


@pytest.mark.asyncio
async def test_malformed_base_url_is_wrapped(settings, recorder_factory):
    recorder = recorder_factory()
    resolver = LegacyDLRResolver(
        base_url="https://dlr.example.com:notaport",
        api_key="secret-key",
        namespace="gs1",
        settings=settings,
        transport=recorder.transport,
    )

    with pytest.raises(TransportFailure) as excinfo:
        await resolver.register("01", "123", _links())

    assert str(excinfo.value).startswith(
        "Failed to register links with identity resolver for identifier 123: "
    )
    assert isinstance(excinfo.value.__cause__, httpx.InvalidURL)
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_unexpected_error_without_text_is_unknown(settings, recorder_factory):
    def boom(request: httpx.Request) -> httpx.Response:
        raise RuntimeError()

    resolver = _resolver(settings, recorder_factory(boom).transport)

    with pytest.raises(TransportFailure) as excinfo:
        await resolver.register("01", "123", _links())

    assert str(excinfo.value).endswith("for identifier 123: Unknown error")
