"""`python src/main.py stats`: mismo comando que el script `portfolio-stats`."""

from __future__ import annotations

import sys

from cli.main import run

if __name__ == "__main__":
    # Nombres de lenguajes y usuarios pueden traer caracteres no ASCII.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
    run()
