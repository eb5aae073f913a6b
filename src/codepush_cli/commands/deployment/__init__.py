"""CodePush deployment commands."""

from .show import show_deployment

__all__ = ["show_deployment"]
