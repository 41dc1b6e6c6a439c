"""HTTP service mode. Requires the ``service`` extra (FastAPI and uvicorn)."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
