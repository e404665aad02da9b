"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...data.catalog_repository import load_catalog
from ...services.screens import registry

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/catalog", status_code=status.HTTP_200_OK)
def health_catalog() -> dict:
    """Report whether the provider catalog loads."""
    try:
        catalog = load_catalog()
    except (FileNotFoundError, ValueError) as exc:
        return {"catalog": "error", "healthy": False, "error": str(exc)}
    return {"catalog": "ok", "healthy": True, "locations": len(catalog), "sessions": len(registry)}
