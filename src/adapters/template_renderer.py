"""Render de las plantillas de configuración (Jinja2).

Por qué está en adapters:
- Las plantillas viajan dentro del paquete (`adapters/templates`).
- El Core solo conoce qué plantilla va a qué fichero.

La salida debe coincidir byte a byte con las configs de referencia: se
conserva el salto de línea final y los bloques no dejan líneas vacías.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@lru_cache(maxsize=1)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def render_template(name: str, **context: Any) -> str:
    """Render `name` (e.g. `sentinel.conf.j2`) with `context`."""

    return _get_env().get_template(name).render(**context)
