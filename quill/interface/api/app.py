"""FastAPI application."""

from typing import Optional

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from quill.config import Settings
from quill.interface.api.errors import register_error_handlers
from quill.interface.api.routes import auth, categories, health, posts, tags
from quill.util.di.container import create_container, setup_di
from quill.util.observability import instrument_fastapi


def create_app(
    container: Optional[AsyncContainer] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; the production container is built when omitted
        settings: Application settings; loaded from the environment when omitted
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="Quill API",
        description="Blogging platform API with drafts and premium posts",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance, settings)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(categories.router)
    app_instance.include_router(tags.router)

    # Stored cover images are served from the upload directory
    app_instance.mount(
        settings.uploads.public_prefix,
        StaticFiles(directory=settings.uploads.directory, check_dir=False),
        name="uploads",
    )

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
