"""Ejecuta `portfolio-stats` desde un checkout sin instalar.

    python -m main stats --raw
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC) not in sys.path:
        sys.path.insert(0, str(SRC))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
