import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cles_engine import __version__
from cles_engine.api.router import api_router
from cles_engine.config import settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title="CLES Engine",
        version=__version__,
        description="Common language effect sizes and overlap charts for Cohen's d",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/health")
    def health():
        return {"ok": True, "version": __version__}

    return app


app = create_app()
