"""FastAPI application entrypoint for peeky service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import DiscoveryError, FetchError, PeekyError, UnsafePathError
from ..models import QuartoApps, StandaloneApp
from ..orchestrator import APP_DIR, Orchestrator
from ..reporting import render_result


class AppRequest(BaseModel):
    url: str
    output_dir: Optional[str] = None


class QuartoRequest(BaseModel):
    url: str
    output_format: str = APP_DIR
    output_path: Optional[str] = None


class FileSummary(BaseModel):
    name: str
    type: str


class AppSummary(BaseModel):
    engine: Optional[str] = None
    options: Dict[str, Any] = {}
    files: List[FileSummary] = []
    path: Optional[str] = None


class ExtractionResponse(BaseModel):
    kind: str
    output_path: str
    source_url: Optional[str] = None
    output_format: Optional[str] = None
    apps: List[AppSummary] = []
    instructions: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _summarise(result: StandaloneApp | QuartoApps) -> ExtractionResponse:
    instructions = render_result(result)
    if isinstance(result, StandaloneApp):
        files = [FileSummary(name=entry.name, type=entry.type) for entry in result.files]
        return ExtractionResponse(
            kind="standalone",
            output_path=str(result.output_dir),
            source_url=result.source_url,
            apps=[AppSummary(files=files, path=str(result.output_dir))],
            instructions=instructions,
        )
    apps: List[AppSummary] = []
    for index, app in enumerate(result.apps):
        path = str(result.app_dirs[index]) if index < len(result.app_dirs) else None
        apps.append(
            AppSummary(
                engine=app.engine,
                options=dict(app.options),
                files=[FileSummary(name=entry.name, type=entry.type) for entry in app.files.values()],
                path=path,
            )
        )
    return ExtractionResponse(
        kind="quarto",
        output_path=str(result.output_path),
        output_format=result.output_format,
        apps=apps,
        instructions=instructions,
    )


async def _run_blocking(func: Callable[[], Any]) -> Any:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return func()
    return await loop.run_in_executor(None, func)


def _confine(orchestrator: Orchestrator, value: Optional[str]) -> Optional[Path]:
    """Resolve a requested output location under the configured root.

    Relative paths are taken from the root; anything that resolves outside it
    raises ``UnsafePathError``.
    """
    if value is None:
        return None
    root = orchestrator.config.root.resolve()
    requested = Path(value).expanduser()
    target = (requested if requested.is_absolute() else root / requested).resolve()
    if not target.is_relative_to(root):
        raise UnsafePathError(f"Refusing to write to {value!r} outside {root}")
    return target


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing peeky operations."""
    app = FastAPI(title="peeky Service", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request to keep state predictable.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/app", response_model=ExtractionResponse)
    async def peek_app(
        payload: AppRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ExtractionResponse:
        output_dir = _confine(orchestrator, payload.output_dir)
        result = await _run_blocking(lambda: orchestrator.peek_app(payload.url, output_dir))
        return _summarise(result)

    @app.post("/quarto", response_model=ExtractionResponse)
    async def peek_quarto(
        payload: QuartoRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ExtractionResponse:
        output_path = _confine(orchestrator, payload.output_path)
        result = await _run_blocking(
            lambda: orchestrator.peek_quarto(
                payload.url,
                output_format=payload.output_format,
                output_path=output_path,
            )
        )
        return _summarise(result)

    @app.post("/standalone", response_model=ExtractionResponse)
    async def peek_standalone(
        payload: AppRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ExtractionResponse:
        output_dir = _confine(orchestrator, payload.output_dir)
        result = await _run_blocking(
            lambda: orchestrator.peek_standalone(payload.url, output_dir)
        )
        return _summarise(result)

    @app.exception_handler(DiscoveryError)
    async def discovery_error_handler(_: Any, exc: DiscoveryError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc), "url": exc.url})

    @app.exception_handler(FetchError)
    async def fetch_error_handler(_: Any, exc: FetchError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={"detail": str(exc), "url": exc.url, "status": exc.status},
        )

    @app.exception_handler(PeekyError)
    async def peeky_error_handler(_: Any, exc: PeekyError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install 'peeky[service]'`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)
