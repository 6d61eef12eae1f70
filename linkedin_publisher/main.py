from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
import uvicorn
from .config import get_settings
from .core.plugin import LinkedInPlugin, NoticeLog
from .core.settings_store import SettingsStore
from .routes.post_routes import router as linkedin_router
from .utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)

def create_app(plugin: Optional[LinkedInPlugin] = None) -> FastAPI:
    """
    Build the host application.

    The lifespan loads the plugin on startup and unloads it on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.PLUGIN_NAME} in {settings.ENVIRONMENT} environment")
        logger.debug(f"LinkedIn API: {settings.LINKEDIN_API_BASE_URL} (version {settings.LINKEDIN_API_VERSION})")

        app.state.plugin = plugin or LinkedInPlugin(SettingsStore(), notify=NoticeLog())
        app.state.plugin.load()

        yield

        app.state.plugin.unload()
        logger.info(f"Shutting down {settings.PLUGIN_NAME}")

    app = FastAPI(
        title=settings.PLUGIN_NAME,
        description="Publish text posts to LinkedIn",
        version="1.0.0",
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan
    )
    app.include_router(linkedin_router, prefix="/linkedin", tags=["linkedin"])

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": "1.0.0",
            "environment": settings.ENVIRONMENT
        }

    return app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "linkedin_publisher.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level="info"
    )
