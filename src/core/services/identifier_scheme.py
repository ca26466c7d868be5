"""Álgebra de identificadores GS1.

Funciones puras (sin I/O) que convierten la entrada cruda en un
`Identifier` canónico y derivan de él el element string y el qualifier path.

Formas admitidas de `identifierKeyPath`:
- string: JSON pointer hacia una URL GS1 Digital Link dentro de `data`;
- descriptor `{primary: {ai, path}, qualifiers: [{ai, path}]}`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from jsonpointer import JsonPointerException, resolve_pointer
from pydantic import ValidationError

from core.domain.models import AIValue, Identifier, IdentifierKeyPathDescriptor
from core.errors import InvalidIdentifierKeyPath, NoAIPairsFound, PrimaryAIOrValueMissing

_AI_PAIR = re.compile(r"/(\d{2}|\d{3})/([^/]+)")


def _lookup(data: Any, pointer: str) -> Any:
    try:
        return resolve_pointer(data, pointer, None)
    except JsonPointerException as exc:
        raise InvalidIdentifierKeyPath() from exc


def _as_value(raw: Any) -> str | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)):
        return str(raw)
    return None


def parse_digital_link(url: Any) -> Identifier:
    """Split a Digital Link URL into primary and qualifier AI pairs."""

    if not isinstance(url, str):
        raise NoAIPairsFound()
    matches = _AI_PAIR.findall(url)
    if not matches:
        raise NoAIPairsFound()
    pairs = [AIValue(ai=ai, value=value) for ai, value in matches]
    return Identifier(primary=pairs[0], qualifiers=pairs[1:])


def _from_descriptor(descriptor: IdentifierKeyPathDescriptor, data: Any) -> Identifier:
    primary = AIValue(ai=descriptor.primary.ai, value=_as_value(_lookup(data, descriptor.primary.path)))
    qualifiers = [
        AIValue(ai=item.ai, value=_as_value(_lookup(data, item.path)))
        for item in descriptor.qualifiers
    ]
    return Identifier(primary=primary, qualifiers=qualifiers)


def construct_identifier_data(identifier_key_path: Any, data: Any) -> Identifier:
    """Resolve the canonical identifier from `data` following `identifier_key_path`.

    Raises:
        NoAIPairsFound: the pointer does not lead to a URL with AI/value segments.
        InvalidIdentifierKeyPath: unsupported shape or malformed pointer.
    """

    if isinstance(identifier_key_path, str):
        return parse_digital_link(_lookup(data, identifier_key_path))

    if isinstance(identifier_key_path, IdentifierKeyPathDescriptor):
        return _from_descriptor(identifier_key_path, data)

    if isinstance(identifier_key_path, Mapping):
        try:
            descriptor = IdentifierKeyPathDescriptor.model_validate(dict(identifier_key_path))
        except ValidationError as exc:
            raise InvalidIdentifierKeyPath() from exc
        return _from_descriptor(descriptor, data)

    raise InvalidIdentifierKeyPath()


def _pairs(items: Any) -> list[tuple[Any, Any]]:
    out: list[tuple[Any, Any]] = []
    for item in items or ():
        if isinstance(item, AIValue):
            out.append((item.ai, item.value))
        elif isinstance(item, Mapping):
            out.append((item.get("ai"), item.get("value")))
    return out


def construct_element_string(identifier: Identifier | Mapping[str, Any]) -> str:
    """Return `(ai)value` for the primary followed by each qualifier."""

    if isinstance(identifier, Identifier):
        primary = identifier.primary
        ai, value = primary.ai, primary.value
        qualifiers: Any = identifier.qualifiers
    else:
        raw_primary = identifier.get("primary") or {}
        ai, value = raw_primary.get("ai"), raw_primary.get("value")
        qualifiers = identifier.get("qualifiers")

    if not ai or not value:
        raise PrimaryAIOrValueMissing()

    parts = [f"({ai}){value}"]
    parts.extend(f"({q_ai}){q_value}" for q_ai, q_value in _pairs(qualifiers))
    return "".join(parts)


def construct_qualifier_path(qualifiers: Sequence[AIValue | Mapping[str, Any]] | None) -> str:
    """Return `/ai/value` per qualifier, or `/` when there are none."""

    pairs = _pairs(qualifiers)
    if not pairs:
        return "/"
    return "".join(f"/{ai}/{value}" for ai, value in pairs)
