"""Script de ejecución sin instalar el paquete.

Por qué existe:
- Permite ejecutar la CLI con `python -m main ...` desde la raíz del repo.
- El código vive en `src/`, así que se añade a `sys.path` antes de importar.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
