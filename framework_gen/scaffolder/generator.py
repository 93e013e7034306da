"""Main scaffolding orchestrator.

Takes a ``GenerationRequest`` and generates a complete Playwright test
project: manifest, runner config, per-environment configs, page objects,
tests, helpers, CI workflow and README.

Every artifact is rendered into a staging directory next to the target.
Only once the whole tree is written is it renamed into place, so a failed
run never leaves a half-written project behind and a previous project is
replaced in one step.
"""

from __future__ import annotations

import asyncio
import os
import tempfile
import time
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from framework_gen.utils import remove_path, save_json

from .playwright_gen import PlaywrightGenerator, build_playwright_context
from .support_gen import TEST_DATA_FILE, SupportGenerator
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Generated-project constants
# ---------------------------------------------------------------------------

ENVIRONMENTS: tuple[str, ...] = ("dev", "qa", "staging", "prod")

README_EXAMPLE_ENV = "qa"

NODE_VERSION = 18

MANIFEST: dict[str, Any] = {
    "name": "playwright-framework",
    "version": "1.0.0",
    "scripts": {
        "test": "npx playwright test --reporter=line,html",
        "report": "npx playwright show-report",
    },
    "dependencies": {"@playwright/test": "^1.47.2"},
    "devDependencies": {"eslint": "^9.0.0"},
}

_ENV_CONFIG_FIELDS = {"base_url", "username", "password"}


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


class GenerationRequest(BaseModel):
    """Pydantic model describing one generation request.

    Field values are not checked for content: whatever is supplied is
    written into the generated project.
    """

    model_config = ConfigDict(populate_by_name=True)

    base_url: str | None = Field(default=None, alias="baseUrl", description="Target site URL")
    username: str | None = Field(default=None, description="Login username")
    password: str | None = Field(default=None, description="Login password")
    env: str = Field(default="dev", description="Fallback environment for the runner config")

    def environment_config(self) -> dict[str, Any]:
        """Return the ``{baseUrl, username, password}`` body of ``config/*.json``.

        Fields the caller never supplied are left out; fields explicitly set
        to ``null`` are kept.
        """
        return self.model_dump(
            by_alias=True, include=_ENV_CONFIG_FIELDS, exclude_unset=True
        )


@dataclass(frozen=True)
class FeatureFlags:
    """Optional artifacts, decided once per request."""

    login: bool = False

    @classmethod
    def from_request(cls, request: GenerationRequest) -> "FeatureFlags":
        return cls(login=bool(request.username and request.password))


@dataclass
class GenerationResult:
    """Outcome of a successful generation."""

    path: Path
    files: list[str] = field(default_factory=list)
    flags: FeatureFlags = field(default_factory=FeatureFlags)
    elapsed: float = 0.0


class GenerationError(Exception):
    """Raised when writing the generated project fails."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"Step '{step}' failed: {message}")


Step = Callable[[Path, dict[str, Any]], Awaitable[list[Path]]]


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class FrameworkGenerator:
    """Main scaffolding orchestrator.

    Given a ``GenerationRequest`` and an output directory, generates:
    - ``package.json`` and ``playwright.config.js``
    - ``config/{dev,qa,staging,prod}.json``
    - page objects under ``pages/`` and specs under ``tests/``
    - helper modules and fixture data under ``utils/``
    - ``.github/workflows/playwright.yml`` and ``README.md``
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.playwright_gen = PlaywrightGenerator(self.renderer)
        self.support_gen = SupportGenerator(self.renderer)

    # -- Public API --------------------------------------------------------

    async def generate(
        self, request: GenerationRequest, output_dir: str | Path
    ) -> GenerationResult:
        """Generate the project and move it to *output_dir*.

        Any existing content at *output_dir* is replaced.

        Args:
            request: The generation parameters.
            output_dir: Directory that will hold the generated project.

        Returns:
            A ``GenerationResult`` with the absolute path and written files.

        Raises:
            GenerationError: If any file-system operation fails.  The
                previous content of *output_dir* is left untouched.
        """
        started = time.monotonic()
        target = Path(output_dir).expanduser().resolve()
        flags = FeatureFlags.from_request(request)
        context = self._build_context(request)

        staging = await self._create_staging_dir(target)
        try:
            written: list[Path] = []
            for step_name, step in self._steps(flags):
                try:
                    written.extend(await step(staging, context))
                except (OSError, UnicodeError) as exc:
                    raise GenerationError(step_name, str(exc)) from exc

            files = [p.relative_to(staging).as_posix() for p in written]

            try:
                await asyncio.to_thread(_swap_into_place, staging, target)
            except OSError as exc:
                raise GenerationError("swap", str(exc)) from exc
        finally:
            await asyncio.to_thread(remove_path, staging)

        return GenerationResult(
            path=target,
            files=files,
            flags=flags,
            elapsed=time.monotonic() - started,
        )

    # -- Pipeline ----------------------------------------------------------

    def _steps(self, flags: FeatureFlags) -> list[tuple[str, Step]]:
        """The ordered emission pipeline for one request."""
        return [
            ("manifest", self._write_manifest),
            ("runner-config", self._write_runner_config),
            ("environment-configs", self._write_environment_configs),
            (
                "pages",
                partial(self.playwright_gen.generate_pages, include_login=flags.login),
            ),
            (
                "tests",
                partial(self.playwright_gen.generate_tests, include_login=flags.login),
            ),
            ("utils", self.support_gen.generate),
            ("ci-workflow", self._render_ci),
            ("readme", self._render_readme),
        ]

    # -- Context building --------------------------------------------------

    def _build_context(self, request: GenerationRequest) -> dict[str, Any]:
        """Build the Jinja2 template context from the request."""
        return {
            **build_playwright_context(),
            "env": request.env,
            "environment_config": request.environment_config(),
            "environments": list(ENVIRONMENTS),
            "readme_example_env": README_EXAMPLE_ENV,
            "node_version": NODE_VERSION,
            "test_data_file": TEST_DATA_FILE,
        }

    # -- Directory handling ------------------------------------------------

    async def _create_staging_dir(self, target: Path) -> Path:
        """Create an empty sibling of *target* to build into."""

        def _mkdtemp() -> Path:
            target.parent.mkdir(parents=True, exist_ok=True)
            staging = Path(
                tempfile.mkdtemp(prefix=f".{target.name}-", suffix=".tmp", dir=target.parent)
            )
            staging.chmod(0o755)
            return staging

        try:
            return await asyncio.to_thread(_mkdtemp)
        except OSError as exc:
            raise GenerationError("prepare", str(exc)) from exc

    # -- Artifacts ---------------------------------------------------------

    async def _write_manifest(self, root: Path, ctx: dict[str, Any]) -> list[Path]:
        """Write ``package.json``."""
        return [await save_json(MANIFEST, root / "package.json")]

    async def _write_runner_config(self, root: Path, ctx: dict[str, Any]) -> list[Path]:
        return [await self.playwright_gen.generate_config(root, ctx)]

    async def _write_environment_configs(
        self, root: Path, ctx: dict[str, Any]
    ) -> list[Path]:
        """Write the same config body once per known environment."""
        written: list[Path] = []
        for env_name in ENVIRONMENTS:
            written.append(
                await save_json(
                    ctx["environment_config"], root / "config" / f"{env_name}.json"
                )
            )
        return written

    async def _render_ci(self, root: Path, ctx: dict[str, Any]) -> list[Path]:
        """Render the GitHub Actions workflow."""
        out = await self.renderer.render_to_file(
            ".github/workflows/playwright.yml.j2",
            root / ".github" / "workflows" / "playwright.yml",
            ctx,
        )
        return [out]

    async def _render_readme(self, root: Path, ctx: dict[str, Any]) -> list[Path]:
        out = await self.renderer.render_to_file(
            "README.md.j2", root / "README.md", ctx
        )
        return [out]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _swap_into_place(staging: Path, target: Path) -> None:
    """Replace *target* with *staging* using renames.

    The previous target is renamed aside first and restored if the second
    rename fails; it is deleted only after the new tree is in place.
    """
    backup: Path | None = None
    if target.exists() or target.is_symlink():
        backup = target.with_name(f".{target.name}-{uuid.uuid4().hex[:8]}.old")
        os.replace(target, backup)

    try:
        os.replace(staging, target)
    except OSError:
        if backup is not None:
            os.replace(backup, target)
        raise

    if backup is not None:
        remove_path(backup)
