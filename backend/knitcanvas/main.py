"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from knitcanvas.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.knitcanvas_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="knitcanvas",
        description="Motif placement engine for knitted garment templates",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from knitcanvas.api.errors import register_error_handlers
    from knitcanvas.api.router import api_router

    register_error_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()
