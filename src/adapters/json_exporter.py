"""Exportación JSON del resultado de publicación.

Por qué JSON:
- Interoperabilidad con pipelines que consumen la credencial y la URI del resolver.
- Formato estable (claves ordenadas) para poder versionar/diffear resultados.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import PublishResult


def export_publish_result(*, result: PublishResult, output_path: Path) -> Path:
    """Exporta `PublishResult` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json", by_alias=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
