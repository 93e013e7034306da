"""Framework generator configuration.

Typed service configuration built on Pydantic v2 so that values coming from
the environment or the command line are validated at construction time.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_OUTPUT_DIR = "generated-project"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4000


class Config(BaseModel):
    """Global framework generator configuration.

    Instances are created once by the CLI entry point (or by the server
    factory) and passed to the rest of the system.
    """

    output_dir: Path = Field(
        default=Path(DEFAULT_OUTPUT_DIR),
        description="Directory the generated project is written to",
    )
    host: str = Field(default=DEFAULT_HOST, description="Interface the API binds to")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="API port")

    @property
    def resolved_output_dir(self) -> Path:
        """Absolute form of :attr:`output_dir`, resolved against the cwd."""
        return self.output_dir.expanduser().resolve()

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FRAMEWORK_GEN_OUTPUT_DIR, FRAMEWORK_GEN_HOST, FRAMEWORK_GEN_PORT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FRAMEWORK_GEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["FRAMEWORK_GEN_OUTPUT_DIR"])
        if os.environ.get("FRAMEWORK_GEN_HOST"):
            kwargs["host"] = os.environ["FRAMEWORK_GEN_HOST"]
        if os.environ.get("FRAMEWORK_GEN_PORT"):
            kwargs["port"] = int(os.environ["FRAMEWORK_GEN_PORT"])
        return cls(**kwargs)
