"""HTTP API for the framework generator.

Exposes a single endpoint::

    POST /generate-framework
    {"baseUrl": "...", "username": "...", "password": "...", "env": "qa"}

which regenerates the project in the configured output directory and answers
with ``{"message": ..., "path": ...}``.
"""

from __future__ import annotations

import asyncio

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from framework_gen import __version__
from framework_gen.config import Config
from framework_gen.scaffolder import FrameworkGenerator, GenerationError, GenerationRequest
from framework_gen.utils import console, format_duration, print_error, print_success

SUCCESS_MESSAGE = "Framework generated successfully"
FAILURE_MESSAGE = "Framework generation failed"


class GenerationResponse(BaseModel):
    message: str
    path: str


def create_app(
    config: Config | None = None,
    generator: FrameworkGenerator | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Service configuration.  Defaults to ``Config.from_env()``.
        generator: Generator instance, injectable for tests.
    """
    config = config or Config.from_env()
    app = FastAPI(title="Playwright Framework Generator", version=__version__)
    app.state.config = config
    app.state.generator = generator or FrameworkGenerator()
    # Every request writes the same directory.
    app.state.lock = asyncio.Lock()

    @app.exception_handler(GenerationError)
    async def _generation_failed(request: Request, exc: GenerationError) -> JSONResponse:
        print_error(f"Generation failed: {exc}")
        return JSONResponse(status_code=500, content={"message": FAILURE_MESSAGE})

    @app.post("/generate-framework", response_model=GenerationResponse)
    async def generate_framework(body: GenerationRequest, request: Request) -> GenerationResponse:
        state = request.app.state
        output_dir = state.config.resolved_output_dir
        async with state.lock:
            console.print(f"  Generating framework into [bold]{output_dir}[/bold]...")
            result = await state.generator.generate(body, output_dir)

        print_success(
            f"Generated {len(result.files)} files in {format_duration(result.elapsed)}"
        )
        return GenerationResponse(message=SUCCESS_MESSAGE, path=str(result.path))

    return app
