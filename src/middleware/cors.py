"""
CORS Middleware Configuration.

Handles Cross-Origin Resource Sharing settings.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def parse_origins(raw: str) -> list[str]:
    """Split a comma separated origin list, dropping blanks."""
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


def setup_cors(app: FastAPI, origins: str = "*") -> None:
    """
    Configure CORS middleware for the application.

    Args:
        app: FastAPI application instance
        origins: Comma separated allowed origins (CORS_ORIGINS)
    """
    allowed = parse_origins(origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        # Browsers reject credentials with a wildcard origin
        allow_credentials=allowed != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
