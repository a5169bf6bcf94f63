"""Exportación JSON de páginas de talentos y del panel.

Por qué JSON:
- Interoperabilidad con hojas de cálculo, notebooks y otros pipelines.
- Conserva campos anidados (skills, idiomas, salario) que el CSV aplana.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel

from core.domain.models import TalentPage


def dumps_model(model: BaseModel) -> str:
    """JSON UTF-8 con formato estable (claves ordenadas, indentado)."""

    payload = model.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_json(*, model: BaseModel, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_model(model), encoding="utf-8")
    return output_path


def export_talents_json(*, page: TalentPage, output_path: Path) -> Path:
    return export_json(model=page, output_path=output_path)
