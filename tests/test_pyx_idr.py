"""Pyx IDR adapter tests.

Covers:
- linkType namespacing, hreflang/context/mime defaults
- Default flags gated by adapter configuration (all false by default)
- Authorization header passed verbatim, resolver URI with qualifier path
- Constructor checks, input checks, HTTP error wrapping
- Resolver description and link type queries
"""

from __future__ import annotations

import httpx
import pytest

from adapters.link_resolvers import PyxIDRResolver, build_link_resolver
from adapters.link_resolvers.legacy_dlr import LegacyDLRResolver
from core.domain.context import ResolverConfig
from core.domain.models import DefaultFlags, LinkDescriptor
from core.errors import HttpStatusFailure, RegistrationInputMissing, ResolverQueryError

AUTH = {"Authorization": "Bearer pyx-token"}


def _resolver(settings, transport, **kwargs) -> PyxIDRResolver:
    return PyxIDRResolver(
        base_url="https://idr.example.com",
        headers=AUTH,
        namespace="untp",
        settings=settings,
        transport=transport,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_link_mapping(settings, recorder_factory):
    recorder = recorder_factory()
    resolver = _resolver(settings, recorder.transport)
    links = [
        LinkDescriptor(href="https://a.example.com", rel="dpp", title="Passport"),
        LinkDescriptor(
            href="https://b.example.com",
            rel="untp:dcc",
            type="text/html",
            title="Conformity",
            hreflang=["fr", "en"],
            context="nz",
        ),
    ]

    await resolver.register("abn", "51824753556", links)

    request = recorder.last
    assert str(request.url) == "https://idr.example.com/resolver"
    assert request.headers["Authorization"] == "Bearer pyx-token"

    body = recorder.last_json()
    assert body["namespace"] == "untp"
    assert body["itemDescription"] == "Passport"
    first, second = body["responses"]
    assert first["linkType"] == "untp:dpp"
    assert first["mimeType"] == "application/json"
    assert first["ianaLanguage"] == "en"
    assert first["context"] == "au"
    assert second["linkType"] == "untp:dcc"
    assert second["mimeType"] == "text/html"
    assert second["ianaLanguage"] == "fr"
    assert second["context"] == "nz"


@pytest.mark.asyncio
async def test_default_flags_off_unless_configured(settings, recorder_factory):
    recorder = recorder_factory()
    links = [
        LinkDescriptor(href="https://a", rel="dpp", title="A", default=True),
        LinkDescriptor(href="https://b", rel="dpp", title="B"),
    ]

    await _resolver(settings, recorder.transport).register("01", "1", links)
    plain = recorder.last_json()["responses"]

    flags = DefaultFlags(default_link_type=True, default_mime_type=True, fwqs=True)
    await _resolver(settings, recorder.transport, default_flags=flags).register("01", "1", links)
    configured = recorder.last_json()["responses"]

    keys = ("defaultLinkType", "defaultIanaLanguage", "defaultContext", "defaultMimeType")
    for response in plain:
        assert all(response[k] is False for k in keys)
        assert response["fwqs"] is False

    default_link, other = configured
    assert default_link["defaultLinkType"] is True
    assert default_link["defaultMimeType"] is True
    assert default_link["defaultIanaLanguage"] is False
    assert default_link["defaultContext"] is False
    assert all(other[k] is False for k in keys)
    assert default_link["fwqs"] is True and other["fwqs"] is True


@pytest.mark.asyncio
async def test_resolver_uri_and_item_description(settings, recorder_factory):
    recorder = recorder_factory()
    resolver = _resolver(settings, recorder.transport, item_description="Configured", context="us")
    links = [LinkDescriptor(href="https://a", rel="dpp", title="A")]

    with_path = await resolver.register("01", "123", links, "/10/LOT1")
    bare = await resolver.register("01", "123", links, "/")
    none = await resolver.register("01", "123", links)

    assert with_path.resolver_uri == "https://idr.example.com/untp/01/123/10/LOT1"
    assert bare.resolver_uri == "https://idr.example.com/untp/01/123"
    assert none.resolver_uri == "https://idr.example.com/untp/01/123"
    body = recorder.last_json()
    assert body["itemDescription"] == "Configured"
    assert body["responses"][0]["context"] == "us"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_url": ""},
        {"namespace": ""},
        {"headers": {}},
        {"headers": {"Content-Type": "application/json"}},
    ],
)
def test_constructor_requires_url_namespace_and_auth(kwargs):
    params = {"base_url": "https://idr.example.com", "headers": AUTH, "namespace": "untp"}
    params.update(kwargs)

    with pytest.raises(ValueError):
        PyxIDRResolver(**params)


@pytest.mark.asyncio
async def test_missing_input_fails_before_http(settings, recorder_factory):
    recorder = recorder_factory()
    resolver = _resolver(settings, recorder.transport)
    link = LinkDescriptor(href="https://a", rel="dpp", title="A")

    with pytest.raises(RegistrationInputMissing):
        await resolver.register("", "1", [link])
    with pytest.raises(RegistrationInputMissing):
        await resolver.register("01", "", [link])
    with pytest.raises(RegistrationInputMissing):
        await resolver.register("01", "1", [])
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_http_500_is_wrapped(settings, recorder_factory):
    recorder = recorder_factory(status_code=500)
    resolver = _resolver(settings, recorder.transport)

    with pytest.raises(HttpStatusFailure) as excinfo:
        await resolver.register("01", "1", [LinkDescriptor(href="https://a", rel="dpp", title="A")])

    assert str(excinfo.value).endswith(": HTTP 500: Internal Server Error")
    assert "identifier 1" in str(excinfo.value)


@pytest.mark.asyncio
async def test_description_and_link_types(settings, recorder_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/.well-known/resolver":
            return httpx.Response(200, json={"name": "Pyx IDR", "supportedLinkTypes": [], "version": "2"})
        if request.url.path == "/voc":
            assert request.url.params["show"] == "linktypes"
            return httpx.Response(
                200,
                json={"untp:dpp": {"title": "Digital Product Passport"}, "gs1:pip": {}, "broken": {}},
            )
        return httpx.Response(404)

    recorder = recorder_factory(handler)
    resolver = _resolver(settings, recorder.transport)

    description = await resolver.get_resolver_description()
    link_types = await resolver.get_link_types()

    assert description.name == "Pyx IDR"
    assert [lt.qualified for lt in link_types] == ["untp:dpp", "gs1:pip"]
    assert link_types[0].title == "Digital Product Passport"
    assert recorder.requests[0].headers["Authorization"] == "Bearer pyx-token"


@pytest.mark.asyncio
async def test_link_types_list_shape_and_errors(settings, recorder_factory):
    listing = recorder_factory(body=[{"namespace": "untp", "type": "dte"}, {"type": "x"}])
    resolver = _resolver(settings, listing.transport)

    assert [lt.qualified for lt in await resolver.get_link_types()] == ["untp:dte"]

    failing = _resolver(settings, recorder_factory(status_code=503).transport)
    with pytest.raises(ResolverQueryError) as excinfo:
        await failing.get_resolver_description()
    assert "HTTP 503: Service Unavailable" in str(excinfo.value)


def test_factory_selects_adapter_from_config():
    legacy = build_link_resolver(
        ResolverConfig.model_validate({"dlrAPIUrl": "https://dlr", "dlrAPIKey": "k", "namespace": "gs1"})
    )
    pyx = build_link_resolver(
        ResolverConfig.model_validate(
            {"dlrAPIUrl": "https://idr", "dlrAPIKey": "k", "namespace": "untp", "type": "PYX_IDR"}
        )
    )

    assert isinstance(legacy, LegacyDLRResolver)
    assert isinstance(pyx, PyxIDRResolver)
    assert pyx.context == "au"
    assert pyx.default_flags == DefaultFlags()
