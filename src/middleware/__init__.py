"""
Middleware Module.

Exports middleware setup functions for FastAPI application.
"""

from fastapi import FastAPI

from config.settings import Settings
from src.middleware.cors import setup_cors
from src.middleware.logging import setup_logging


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    setup_cors(app, settings.cors_origins)
    setup_logging(app)
