"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `publish` y `doctor`.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.kinds import CredentialKind
from core.domain.models import PublishResult, VerificationWarning


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("UNTP Publisher", style="bold cyan")
    subtitle = Text("Credenciales verificables • GS1 Digital Link • Resolvers", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_table(kind: CredentialKind, result: PublishResult) -> Table:
    table = Table(title="Publish result")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    credential = result.credential
    table.add_row("Kind", kind.value)
    table.add_row("Credential id", str(credential.get("id", "-"))[:120])
    table.add_row("Credential type", str(credential.get("type", "-")))
    table.add_row("Decoded", "yes" if result.decoded_credential else "no")
    table.add_row("Resolver URI", result.resolver_uri)
    return table


def build_warnings_table(warnings: Sequence[VerificationWarning]) -> Table:
    """Tabla para advertencias de link types ausentes."""

    table = Table(title="Resolver link types")
    table.add_column("Type", style="yellow", no_wrap=True)
    table.add_column("Message", style="white")
    for warning in warnings:
        table.add_row(warning.type, warning.message)
    return table
