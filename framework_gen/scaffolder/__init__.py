"""Framework scaffolder -- generates Playwright test project structures.

Quick usage::

    from framework_gen.scaffolder import FrameworkGenerator, GenerationRequest

    request = GenerationRequest(baseUrl="https://example.com", env="qa")
    result = await FrameworkGenerator().generate(request, "/tmp/generated-project")
"""

from framework_gen.scaffolder.generator import (
    FeatureFlags,
    FrameworkGenerator,
    GenerationError,
    GenerationRequest,
    GenerationResult,
)
from framework_gen.scaffolder.templates import TemplateRenderer

__all__ = [
    "FeatureFlags",
    "FrameworkGenerator",
    "GenerationError",
    "GenerationRequest",
    "GenerationResult",
    "TemplateRenderer",
]
