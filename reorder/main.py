"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from reorder.api.routes import admin_router, auth_router, posts_router
from reorder.config import settings
from reorder.db import engine
from reorder.services.reorder_page import AdminMenu, ReorderPage

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"Reorder pages: {', '.join(app.state.admin_menu.entries) or 'none'}")
    yield
    await engine.dispose()


def create_app(pages: list[ReorderPage] | None = None) -> FastAPI:
    """Build the application with one reorder page per post type."""
    if pages is None:
        pages = [ReorderPage(post_type=post_type) for post_type in settings.reorder_post_types]

    app = FastAPI(
        title="Post Reorder Service",
        description="Drag-and-drop reordering of posts",
        version="0.1.0",
        lifespan=lifespan,
    )

    menu = AdminMenu()
    for page in pages:
        menu.register(page)
    app.state.admin_menu = menu

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # Include routers
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(posts_router, prefix="/api/v1")
    app.include_router(admin_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "service": "reorder-service"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("reorder.main:app", host="0.0.0.0", port=settings.app_port)
