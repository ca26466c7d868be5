"""Ejecuta la CLI desde `src/` sin instalar el paquete.

Mismo efecto que el script `untp-publisher` declarado en pyproject.
"""

from __future__ import annotations

import sys


def _force_utf8_streams() -> None:
    # cp1252 no codifica el separador "•" del banner ni el JSON con acentos.
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")


def main() -> None:
    if sys.platform == "win32":
        _force_utf8_streams()

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
