from . import sources

__all__ = ["sources"]
