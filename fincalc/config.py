"""Default settings; override with FINCALC_* environment variables."""

from __future__ import annotations

from typing import Iterable, List, Union


class Config:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL = "INFO"
    JSON_SORT_KEYS = False


def parse_origins(value: Union[str, Iterable[str]]) -> List[str]:
    """Accept a list or a comma-separated string (the usual env var shape)."""
    if isinstance(value, str):
        return [origin.strip() for origin in value.split(",") if origin.strip()]
    return list(value)
