"""
Shared API dependencies for FastAPI routes.

Provides the placement pipeline, built once per process from settings.
"""

import logging
from functools import lru_cache

from config.settings import get_settings
from services.pipeline import PlacementPipeline, build_pipeline

logger = logging.getLogger(__name__)


@lru_cache
def get_pipeline() -> PlacementPipeline:
    """
    Dependency providing the configured placement pipeline.

    Usage:
        @router.post("/generate-chart")
        async def generate_chart(pipeline: PlacementPipeline = Depends(get_pipeline)):
            ...

    Returns:
        PlacementPipeline: Cached pipeline instance
    """
    settings = get_settings()
    logger.info(
        f"Building placement pipeline (location={settings.location_provider}, "
        f"timezone={settings.timezone_provider}, houses={settings.house_system})"
    )
    return build_pipeline(settings)
