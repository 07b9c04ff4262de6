from .local_storage import LocalFileStorage

__all__ = ["LocalFileStorage"]
