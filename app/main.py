from typing import Optional

from fastapi import FastAPI

from app.api.routes import router as vending_router
from app.config.settings import Settings
from app.logger import get_logger, set_log_level
from app.services.vending_service import VendingMachineService

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    set_log_level(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.vending_service = VendingMachineService.from_settings(settings)
    app.include_router(vending_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok", "service": settings.app_name}

    logger.info("Application %s started", settings.app_name)
    return app


app = create_app()
