#run it with uvicorn portfolio_api.main:app --reload
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_api.api.api_router import api_router
from portfolio_api.core.config import Settings, get_settings
from portfolio_api.core.errors import register_exception_handlers
from portfolio_api.core.notifications import MailNotifier
from portfolio_api.db.init_db import initialize_database
from portfolio_api.db.mongo import MongoStore

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(settings: Optional[Settings] = None, store: Optional[MongoStore] = None,
               notifier: Optional[MailNotifier] = None) -> FastAPI:
    """
    Build the FastAPI application.

    A store or notifier passed in is used as-is and left open on shutdown;
    otherwise both are built from settings when the app starts.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting contact API...")
        owns_store = store is None

        if owns_store:
            app.state.store = MongoStore.from_settings(settings)
            app.state.store.connect()
            try:
                await initialize_database(app.state.store)
            except Exception:
                app.state.store.close()
                raise
        else:
            app.state.store = store

        app.state.notifier = notifier or MailNotifier.from_settings(settings)
        if not app.state.notifier.configured:
            logger.warning("⚠️ MAIL_API_KEY or NOTIFY_EMAIL not set, submissions will be saved without notifications")

        try:
            yield
        finally:
            if owns_store:
                app.state.store.close()
            logger.info("Contact API shut down")

    app = FastAPI(title="Portfolio Contact API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/api/health")
    async def health_check():
        """Liveness check; does not touch the database or the mail relay."""
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


configure_logging(get_settings().log_level)
app = create_app()


def run():
    settings = get_settings()
    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Health check: http://localhost:{settings.port}/api/health")
    uvicorn.run(
        "portfolio_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
