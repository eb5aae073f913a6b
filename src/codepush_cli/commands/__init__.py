"""CodePush CLI commands."""

from .deployment import show_deployment

__all__ = ["show_deployment"]
