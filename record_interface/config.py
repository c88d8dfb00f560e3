from __future__ import annotations

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel


class Settings(BaseModel):
    """Library defaults, resolved from RECORD_INTERFACE_* environment variables."""

    # Default for wrap() when the caller does not pass deep_copy explicitly.
    deep_copy: bool = True


def _env(name: str) -> Optional[str]:
    v = (os.getenv(name) or "").strip()
    return v or None


def load_settings() -> Settings:
    # Read at call time so tests (and long-lived processes) can flip env vars.
    data: Dict[str, Any] = {}
    deep_copy = _env("RECORD_INTERFACE_DEEP_COPY")
    if deep_copy is not None:
        data["deep_copy"] = deep_copy
    return Settings(**data)
