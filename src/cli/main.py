"""CLI principal (Typer).

Por qué Typer + Rich:
- Comandos tipados con ayuda autogenerada.
- Salida legible (tablas) sin mezclar presentación con el pipeline del Core.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_publish_result
from adapters.local_cache import JsonFileCache
from adapters.storage_service import HttpDocumentStorage
from adapters.vckit_issuer import VCKitIssuer
from cli import doctor
from cli.ui_components import build_result_table, print_banner
from core.config import AppSettings
from core.domain.kinds import CredentialKind
from core.errors import PublisherError
from core.logging_setup import setup_logging
from core.services.credential_publisher import PublisherCollaborators, publish_credential

app = typer.Typer(
    no_args_is_help=True,
    help="Publish UNTP credentials and register them with a GS1 link resolver.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _read_json(path: Path, label: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"{label} file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{label} is not valid JSON: {exc}") from exc


def _parse_kind(raw: str) -> CredentialKind:
    try:
        return CredentialKind.parse(raw)
    except ValueError as exc:
        choices = ", ".join(k.value for k in CredentialKind)
        raise typer.BadParameter(f"{exc}. Choose one of: {choices}") from exc


@app.command()
def publish(
    kind: str = typer.Argument(..., help="Credential/event kind (e.g. digital_product_passport, dpp)."),
    payload: Path = typer.Option(..., "--payload", "-p", help="JSON file with {\"data\": {...}}."),
    context: Path = typer.Option(..., "--context", "-c", help="JSON file with the operation context."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the result as JSON."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the banner."),
) -> None:
    """Issue, store and register one credential."""

    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)
    if not quiet:
        print_banner(_console)

    credential_kind = _parse_kind(kind)
    payload_data = _read_json(payload, "Payload")
    context_data = _read_json(context, "Context")

    collaborators = PublisherCollaborators(
        issuer=VCKitIssuer(settings),
        storage=HttpDocumentStorage(settings),
        local_cache=JsonFileCache(settings=settings),
    )

    try:
        result = asyncio.run(
            publish_credential(credential_kind, payload_data, context_data, collaborators, settings)
        )
    except PublisherError as exc:
        error = exc.to_dict()
        if settings.log_format == "json":
            _console.print_json(data={"error": error})
        else:
            _console.print(f"[red]{error['code']}[/red] {error['message']}")
        raise typer.Exit(code=1) from exc

    _console.print(build_result_table(credential_kind, result))
    if output is not None:
        path = export_publish_result(result=result, output_path=output)
        _console.print(f"[green]Saved result to:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
