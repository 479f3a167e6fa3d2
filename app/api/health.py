# Common language: Environment/ops check that surfaces version pins and the GitHub config in use.
# Use this before/after upgrades to confirm no silent drift.

from fastapi import APIRouter, Depends
from ..core.settings import Settings, get_settings
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except ImportError:
        return "not-installed"

@router.get("/healthz")
def healthz(cfg: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "pydantic": _ver("pydantic"),
            "pydantic_settings": _ver("pydantic_settings"),
            "httpx": _ver("httpx"),
            "structlog": _ver("structlog"),
        },
        "config": {
            "github_base_url": cfg.github_base_url,
            "github_api_version": cfg.github_api_version,
            "github_timeout_seconds": cfg.github_timeout_seconds,
            "token_header": cfg.token_header,
        },
    }
