"""WSGI entrypoint for VitalCare."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
PARENT = ROOT.parent
if str(PARENT) not in sys.path:
    sys.path.insert(0, str(PARENT))
# Running this file directly puts the package dir on sys.path, where our
# `platform` package would shadow the stdlib module.
if str(ROOT) in sys.path:
    sys.path.remove(str(ROOT))

from vitalcare import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    import os

    host = os.environ.get("FLASK_RUN_HOST", "127.0.0.1")
    port = int(os.environ.get("FLASK_RUN_PORT", "5001"))
    app.run(host=host, port=port)  # nosec B104
