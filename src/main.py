"""`python -m main` con `src/` como directorio de trabajo."""

import sys

from cli.main import run

if __name__ == "__main__":
    # Rich draws panels with box characters that cp1252 consoles cannot encode.
    for stream in (sys.stdout, sys.stderr):
        if sys.platform == "win32" and hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8")
    run()
