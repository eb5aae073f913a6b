"""Allow running the CLI with ``python -m codepush_cli``."""

from .main import run

run()
