#!/usr/bin/env python3
"""
FastAPI application factory
"""
import logging
import sys

from fastapi import FastAPI

from api.middleware.exception_handler import setup_exception_handlers
from api.routes.request_ui_routes import router as request_ui_router
from config.settings import API_CONFIG


def create_app() -> FastAPI:
    logging.basicConfig(
        level=API_CONFIG["log_level"],
        stream=sys.stderr,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(title="Request lifecycle UI model")
    setup_exception_handlers(app)
    app.include_router(request_ui_router)

    logging.getLogger(__name__).info("Request UI service initialised")
    return app
