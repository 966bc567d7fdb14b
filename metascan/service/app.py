"""FastAPI application entrypoint for metascan service mode."""

from __future__ import annotations

import argparse
import asyncio
import functools
from typing import Any, Callable, Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..erd import render_mermaid
from ..errors import MetascanError
from ..logging import configure_logging
from ..models import ProjectMetadata
from ..orchestrator import Orchestrator


class ExtractRequest(BaseModel):
    path: str
    scoping: Optional[str] = None


class ErdRequest(BaseModel):
    path: str
    scoping: Optional[str] = None


class ErdResponse(BaseModel):
    mermaid: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing metascan extraction."""
    app = FastAPI(title="metascan", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    async def _extract(orchestrator: Orchestrator, path: str, scoping: Optional[str]) -> ProjectMetadata:
        run = functools.partial(orchestrator.run, path, scoping=scoping)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, run)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/extract")
    async def extract(
        payload: ExtractRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Dict[str, Any]:
        metadata = await _extract(orchestrator, payload.path, payload.scoping)
        return metadata.to_dict()

    @app.post("/erd", response_model=ErdResponse)
    async def erd(
        payload: ErdRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ErdResponse:
        metadata = await _extract(orchestrator, payload.path, payload.scoping)
        return ErdResponse(mermaid=render_mermaid(metadata.relationships))

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(MetascanError)
    async def metascan_error_handler(_: Any, exc: MetascanError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


def main(argv: list[str] | None = None) -> None:  # pragma: no cover - console script
    parser = argparse.ArgumentParser(prog="metascan-service", description="Serve metascan over HTTP.")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Increase log verbosity.")
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)
    run_service(host=args.host, port=args.port)
