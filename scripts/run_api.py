from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import uvicorn

from botmudra.core.config import SETTINGS

if __name__ == "__main__":
    uvicorn.run("botmudra.api.main:app", host=SETTINGS.api_host, port=SETTINGS.api_port)
