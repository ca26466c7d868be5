"""Doctor command for environment and resolver diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.link_resolvers import PyxIDRResolver
from cli.ui_components import build_warnings_table
from core.config import AppSettings, write_user_env_vars
from core.domain.models import VerificationWarning
from core.errors import ResolverQueryError
from core.services.resolver_verification import verify_resolver_description, verify_untp_link_types

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


async def _check_pyx(settings: AppSettings) -> tuple[bool, str, list[VerificationWarning]]:
    resolver = PyxIDRResolver(
        base_url=settings.resolver_api_url or "",
        headers={"Authorization": f"Bearer {settings.resolver_api_key or ''}"},
        namespace=settings.resolver_namespace,
        settings=settings,
    )
    try:
        description = await resolver.get_resolver_description()
        link_types = await resolver.get_link_types()
    except ResolverQueryError as exc:
        return False, exc.message, []
    if not verify_resolver_description(description):
        return False, "Resolver description has no name", []
    return True, str(description.name), verify_untp_link_types(link_types)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="UNTP Publisher Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Log", "OK", f"{settings.log_level} / {settings.log_format}")
    table.add_row("Cache dir", "OK", str(settings.resolved_data_dir()))

    warnings: list[VerificationWarning] = []
    if not settings.resolver_api_url:
        table.add_row("Resolver", "OPTIONAL", "No resolver_api_url set -> skipping resolver checks")
    else:
        table.add_row("Resolver type", "OK", settings.resolver_type)
        ok_http, detail_http = asyncio.run(_check_http(settings.resolver_api_url, settings))
        table.add_row("Resolver connectivity", "OK" if ok_http else "FAIL", detail_http)

        if settings.resolver_type == "PYX_IDR" and ok_http:
            ok_desc, detail_desc, warnings = asyncio.run(_check_pyx(settings))
            table.add_row("Resolver description", "OK" if ok_desc else "FAIL", detail_desc)
            table.add_row(
                "UNTP link types",
                "OK" if ok_desc and not warnings else "WARN",
                f"{len(warnings)} missing" if ok_desc else "-",
            )

    _console.print(table)
    if warnings:
        _console.print(build_warnings_table(warnings))


@app.command(name="setup")
def setup() -> None:
    """Interactive resolver setup (stores config in the user config .env)."""

    resolver_type = typer.prompt("Resolver type (DLR/PYX_IDR)", default="DLR", show_default=True).strip().upper()
    if resolver_type not in ("DLR", "PYX_IDR"):
        raise typer.BadParameter("resolver type must be DLR or PYX_IDR")

    base_url = typer.prompt("Resolver base URL", show_default=False).strip()
    namespace = typer.prompt("Namespace", default="gs1", show_default=True).strip()
    api_key = typer.prompt("Resolver API key", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not namespace:
        raise typer.BadParameter("base URL and namespace are required")

    env_path = write_user_env_vars(
        {
            "UNTP_PUBLISHER_RESOLVER_TYPE": resolver_type,
            "UNTP_PUBLISHER_RESOLVER_API_URL": base_url,
            "UNTP_PUBLISHER_RESOLVER_NAMESPACE": namespace,
            "UNTP_PUBLISHER_RESOLVER_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved resolver config to:[/green] {env_path}")
