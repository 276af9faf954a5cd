"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whattoeat.api.analytics import router as analytics_router
from whattoeat.api.errors import install_exception_handlers
from whattoeat.api.images import router as images_router
from whattoeat.api.meals import router as meals_router
from whattoeat.api.recipes import public_router as public_recipes_router
from whattoeat.api.recipes import router as recipes_router
from whattoeat.app_logging import configure_logging
from whattoeat.config import parse_allowed_origins
from whattoeat.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI(title="What To Eat")
    app.state.container = container

    allowed_origins = parse_allowed_origins(container.settings.cors_allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
        allow_credentials="*" not in allowed_origins,
    )
    install_exception_handlers(app)

    app.include_router(recipes_router)
    app.include_router(public_recipes_router)
    app.include_router(meals_router)
    app.include_router(analytics_router)
    app.include_router(images_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
