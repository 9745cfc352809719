from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tutorhub import __version__
from tutorhub.core.config import get_settings
from tutorhub.core.logging import configure_logging
from tutorhub.infrastructure.database import dispose_engine, init_db
from tutorhub.interfaces.http.routers import create_api_router

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    configure_logging(settings)
    app = FastAPI(
        title=settings.project_name,
        description="Faculty wallets, withdrawal requests and admin payout review",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
