"""Contrato de registro en link resolvers.

Por qué Protocol:
- Legacy DLR y Pyx IDR tienen payloads distintos pero el orquestador sólo
  necesita `register(...)`.
- Se elige el adaptador al construirlo; las llamadas no ramifican por tipo.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import LinkDescriptor, LinkRegistration


@runtime_checkable
class LinkResolverRegistrar(Protocol):
    """Contrato mínimo para registrar enlaces de un identificador.

    Reglas de diseño:
    - `register` es asíncrono porque hace I/O (HTTP).
    - Falla antes de la red si falta scheme, identificador o enlaces.
    """

    namespace: str

    async def register(
        self,
        identifier_scheme: str,
        identifier: str,
        links: Sequence[LinkDescriptor],
        qualifier_path: str | None = None,
        *,
        item_description: str | None = None,
    ) -> LinkRegistration:
        ...
