"""Shared pytest fixtures for the framework generator test suite.

Provides reusable fixtures for:
- Output directories under ``tmp_path``
- Generation requests with and without credentials
- A real ``FrameworkGenerator`` and ``TemplateRenderer``
"""

from __future__ import annotations

from pathlib import Path

import pytest

from framework_gen.scaffolder import FrameworkGenerator, GenerationRequest, TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Target directory for a generated project (not created up front)."""
    return tmp_path / "generated-project"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@pytest.fixture
def credentials_request() -> GenerationRequest:
    """Request with credentials, targeting the qa environment."""
    return GenerationRequest(
        baseUrl="https://example.com",
        username="demo",
        password="demo",
        env="qa",
    )


@pytest.fixture
def anonymous_request() -> GenerationRequest:
    """Request with only a base URL."""
    return GenerationRequest(baseUrl="https://example.com")


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def generator(renderer: TemplateRenderer) -> FrameworkGenerator:
    return FrameworkGenerator(renderer)


@pytest.fixture
def base_context() -> dict:
    """Template context equivalent to what the generator builds for env=qa."""
    request = GenerationRequest(baseUrl="https://example.com", env="qa")
    return FrameworkGenerator()._build_context(request)
