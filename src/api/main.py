import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.deps import get_settings
from src.app_shell.context import ServiceContext
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the service context on startup (unless injected), dispose on shutdown."""
    if getattr(app.state, "context", None) is None:
        settings = get_settings()
        # Fail fast on bad rules
        rules = load_rules(settings.rules_path)
        logger.info("Rules loaded from %s", settings.rules_path)
        app.state.context = ServiceContext.from_db(settings.db_path, rules)

    yield

    app.state.context.close()
    logger.info("Service context closed")


def create_app(context: ServiceContext | None = None) -> FastAPI:
    app = FastAPI(
        title="Manhwa Reader API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.context = context

    # --- Routers ---
    from src.api.routes import account, admin, comics, reader

    app.include_router(comics.router, prefix="/api/comics", tags=["Comics"])
    app.include_router(reader.router, prefix="/api/reader", tags=["Reader"])
    app.include_router(account.router, prefix="/api/account", tags=["Account"])
    app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])

    # CORS (Allow Frontend)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "api"}

    return app


app = create_app()
