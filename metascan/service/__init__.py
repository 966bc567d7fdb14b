"""HTTP service mode for metascan."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
