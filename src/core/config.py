"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP, resolver, caché local) lean config de forma
  consistente.

La configuración por operación (vckit, storage, dlr...) NO vive aquí: llega
como contexto en cada publicación y la valida `core.services.context_validator`.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

APP_DIR_NAME = "untp-publisher"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    """Parse `KEY=value` lines; comments, blanks and lines without `=` are skipped."""

    entries: dict[str, str] = {}
    for line in (raw.strip() for raw in text.splitlines()):
        if line.startswith("#") or "=" not in line:
            continue
        name, _, raw_value = line.partition("=")
        name = name.strip()
        if name:
            entries[name] = raw_value.strip().strip("\"'")
    return entries


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env del usuario (`doctor setup`).

    Los valores `None` no pisan lo ya guardado.
    """

    target = env_path or get_user_env_file()
    target.parent.mkdir(parents=True, exist_ok=True)

    merged: dict[str, str] = {}
    if target.exists():
        try:
            merged = _parse_env_lines(target.read_text(encoding="utf-8"))
        except OSError as exc:
            logger.warning("Could not read %s, rewriting it: %s", target, exc)

    merged.update({name: value for name, value in values.items() if value is not None})

    body = "\n".join(f"{name}={merged[name]}" for name in sorted(merged))
    target.write_text(f"# {APP_DIR_NAME} user config (.env)\n{body}\n", encoding="utf-8")
    return target


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="UNTP_PUBLISHER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="untp-publisher/0.1",
        min_length=1,
        description="User-Agent para issuer, storage y resolvers.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging raíz (DEBUG, INFO, WARNING...).",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Formato de logs: 'json' para pipelines, 'text' para terminal.",
    )

    data_dir: Path | None = Field(
        default=None,
        description="Directorio de la caché local (DPP). Por defecto, dentro del config dir.",
    )

    # Defaults usados por `doctor` (el publish recibe el resolver en el contexto).
    resolver_api_url: str | None = Field(
        default=None,
        description="Base URL del resolver a diagnosticar.",
    )
    resolver_api_key: str | None = Field(
        default=None,
        description="API key (Bearer) del resolver.",
    )
    resolver_namespace: str = Field(
        default="gs1",
        min_length=1,
        description="Namespace de registro en el resolver.",
    )
    resolver_type: Literal["DLR", "PYX_IDR"] = Field(
        default="DLR",
        description="Protocolo del resolver: Legacy DLR o Pyx IDR.",
    )

    def resolved_data_dir(self) -> Path:
        return self.data_dir or (get_user_config_dir() / "cache")
