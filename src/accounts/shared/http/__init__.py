from .errors import ApiError, ErrorType, error_responder, install_error_handlers
from .server import server_error_handler

__all__ = [
    "ApiError",
    "ErrorType",
    "error_responder",
    "install_error_handlers",
    "server_error_handler",
]
