"""FastAPI application entrypoint for myragen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import ConfigError, ConfigResolver, GeneratorOptions
from ..models import CandidateInput, GenerationResult
from ..orchestrator import Orchestrator


class InputDocument(BaseModel):
    path: str
    text: Optional[str] = None


class GenerateRequest(BaseModel):
    inputs: List[InputDocument] = Field(default_factory=list)
    options: Dict[str, str] = Field(default_factory=dict)
    build_properties: Dict[str, str] = Field(default_factory=dict)
    file_options: Dict[str, Dict[str, str]] = Field(default_factory=dict)


class UnitPayload(BaseModel):
    filename: str
    text: str


class DiagnosticPayload(BaseModel):
    code: str
    severity: str
    title: str
    message: str
    args: List[str]


class ConfigPayload(BaseModel):
    namespace: str
    directory_pattern: str
    duplicate_ids: str


class GenerateResponse(BaseModel):
    units: List[UnitPayload]
    diagnostics: List[DiagnosticPayload]
    config: Optional[ConfigPayload] = None


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator(options: GeneratorOptions) -> Orchestrator:
    return Orchestrator(options)


def _to_response(result: GenerationResult) -> GenerateResponse:
    config = None
    if result.config is not None:
        config = ConfigPayload(
            namespace=result.config.namespace,
            directory_pattern=result.config.directory_pattern,
            duplicate_ids=result.config.duplicate_ids,
        )
    return GenerateResponse(
        units=[UnitPayload(filename=unit.filename, text=unit.text) for unit in result.units],
        diagnostics=[DiagnosticPayload(**diag.to_dict()) for diag in result.diagnostics],
        config=config,
    )


def create_app(
    orchestrator_factory: Callable[[GeneratorOptions], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing generation runs."""

    app = FastAPI(title="myragen Service", version="1.0.0")

    async def get_factory() -> Callable[[GeneratorOptions], Orchestrator]:
        return orchestrator_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        factory: Callable[[GeneratorOptions], Orchestrator] = Depends(get_factory),
    ) -> GenerateResponse:
        options = GeneratorOptions(
            global_options=dict(payload.options),
            file_options={key: dict(value) for key, value in payload.file_options.items()},
        ).with_build_properties(payload.build_properties)
        inputs = [CandidateInput.from_text(item.path, item.text) for item in payload.inputs]
        # Reject bad option values up front instead of returning a MYRA999 run.
        ConfigResolver(options).resolve(inputs)
        orchestrator = factory(options)

        def _run() -> GenerationResult:
            return orchestrator.run(inputs)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        return _to_response(result)

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
