import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI

from spkrd.load_settings import Settings, load_settings
from spkrd.routers import play


def create_app(settings: Settings) -> FastAPI:
    """Build the application around one immutable settings object

    Args:
        settings (Settings): Device path, retry timeout and the rest of the configuration

    Returns:
        FastAPI: Application with the /play route
    """

    @asynccontextmanager
    async def lifespan(app):
        """Report the configuration at startup.
        A missing device is only a warning, requests will answer 500 until it appears.
        """
        logging.info(
            f"Starting spkrd on port {settings.port} with {settings.retry_timeout}s "
            f"retry timeout using device {settings.device_path}"
        )
        if not os.path.exists(settings.device_path):
            logging.warning(f"Device {settings.device_path} does not exist")
        try:
            yield
        finally:
            logging.info("Stop Server")

    app = FastAPI(title="spkrd", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(play.play_router)
    return app


def get_app() -> FastAPI:
    """Application factory for `uvicorn --factory spkrd.main:get_app`"""
    return create_app(load_settings())
