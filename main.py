"""Lanzador desde la raíz del repo, sin `pip install -e .`.

    python -m main login --email you@example.com

Pone `src/` al frente de `sys.path` y delega en `cli.main.run`.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


if __name__ == "__main__":
    sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: E402

    run()
