from .error_handlers import register_exception_handlers
from .rate_limit import limiter

__all__ = ["register_exception_handlers", "limiter"]
