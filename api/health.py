"""Health and model listing endpoints."""

from fastapi import APIRouter

from config.settings import get_settings
from services.block_store import get_block_store_registry

router = APIRouter()


@router.get("/api/health")
async def health():
    settings = get_settings()
    return {
        "status": "healthy",
        "openaiConfigured": settings.is_openai_configured,
        "blockSessions": get_block_store_registry().size,
    }


@router.get("/models")
async def list_models():
    """Configured model per role and the current default."""
    settings = get_settings()
    return {
        "default": settings.default_model,
        "indy": settings.indy_model,
        "fast": settings.fast_model,
        "complex": settings.complex_model,
    }
