"""Helper modules and fixture data for generated projects.

Writes the four ``utils/*.js`` helpers (delay, visibility assertion,
timestamped logger, keyed data lookup) and the ``utils/testData.json``
fixture they read from.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from framework_gen.utils import save_json

from .templates import TemplateRenderer


UTILITY_MODULES: tuple[str, ...] = (
    "waitHelper.js",
    "assertHelper.js",
    "logger.js",
    "dataHelper.js",
)

TEST_DATA_FILE = "testData.json"

SAMPLE_TEST_DATA: dict[str, Any] = {
    "sampleUser": {"username": "demo", "password": "demo"},
}


class SupportGenerator:
    """Generates the ``utils/`` directory of a Playwright project."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(self, output_dir: Path, context: dict[str, Any]) -> list[Path]:
        """Render the utility modules and write the JSON fixture.

        Returns:
            List of written file paths, in emission order.
        """
        utils_dir = output_dir / "utils"
        written: list[Path] = []

        for module in UTILITY_MODULES:
            out = await self.renderer.render_to_file(
                f"utils/{module}.j2", utils_dir / module, context
            )
            written.append(out)

        written.append(await save_json(SAMPLE_TEST_DATA, utils_dir / TEST_DATA_FILE))
        return written
