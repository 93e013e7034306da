"""Playwright runner configuration, page objects and test specs.

Generates:
- ``playwright.config.js`` at the project root
- ``pages/BasePage.js`` and ``pages/HomePage.js``
- ``pages/LoginPage.js`` when credentials were supplied
- ``tests/home.test.js`` and, with credentials, ``tests/login.test.js``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Generated-code constants
# ---------------------------------------------------------------------------

LOGIN_SELECTORS: dict[str, str] = {
    "username": 'input[name="username"], input[type="email"]',
    "password": 'input[type="password"]',
    "submit": 'button[type="submit"], input[type="submit"]',
}

HOME_HEADER_SELECTOR = "h1, header"

# JS regex literal the post-login URL must match.
POST_LOGIN_URL_PATTERN = "/dashboard|home/"

CAPTURE_POLICY: dict[str, str] = {
    "screenshot": "only-on-failure",
    "video": "retain-on-failure",
    "trace": "on-first-retry",
}

REPORTERS: tuple[str, ...] = ("line", "html")


class PlaywrightGenerator:
    """Generates the Playwright runner config, page objects and tests."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate_config(self, output_dir: Path, context: dict[str, Any]) -> Path:
        """Render ``playwright.config.js``.

        The config resolves ``ENV`` when Playwright runs, not now; the
        requested environment only becomes the fallback literal.
        """
        return await self.renderer.render_to_file(
            "playwright.config.js.j2",
            output_dir / "playwright.config.js",
            context,
        )

    async def generate_pages(
        self,
        output_dir: Path,
        context: dict[str, Any],
        *,
        include_login: bool,
    ) -> list[Path]:
        """Render the page objects under ``pages/``.

        Args:
            output_dir: Project root directory.
            context: Template rendering context.
            include_login: Whether to emit ``LoginPage.js``.

        Returns:
            List of written file paths, in emission order.
        """
        pages = ["BasePage.js"]
        if include_login:
            pages.append("LoginPage.js")
        pages.append("HomePage.js")

        written: list[Path] = []
        for page in pages:
            out = await self.renderer.render_to_file(
                f"pages/{page}.j2", output_dir / "pages" / page, context
            )
            written.append(out)
        return written

    async def generate_tests(
        self,
        output_dir: Path,
        context: dict[str, Any],
        *,
        include_login: bool,
    ) -> list[Path]:
        """Render the test specs under ``tests/``."""
        specs = ["login.test.js"] if include_login else []
        specs.append("home.test.js")

        written: list[Path] = []
        for spec in specs:
            out = await self.renderer.render_to_file(
                f"tests/{spec}.j2", output_dir / "tests" / spec, context
            )
            written.append(out)
        return written


def build_playwright_context() -> dict[str, Any]:
    """Template variables shared by every Playwright artifact."""
    return {
        "login_selectors": dict(LOGIN_SELECTORS),
        "home_header": HOME_HEADER_SELECTOR,
        "post_login_url_pattern": POST_LOGIN_URL_PATTERN,
        "capture": dict(CAPTURE_POLICY),
        "reporters": list(REPORTERS),
    }
