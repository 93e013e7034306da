"""Playwright framework generator.

Scaffolds a ready-to-run Playwright end-to-end test project from a base URL
and optional credentials, either over HTTP or from the command line.
"""

__version__ = "1.0.0"
