from .main import show_deployment

__all__ = ["show_deployment"]
