from .catchall import CatchAllExceptionMiddleware
from .handlers import error_response, register_error_handlers

__all__ = [
    "CatchAllExceptionMiddleware",
    "error_response",
    "register_error_handlers",
]
