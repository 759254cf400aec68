"""HTTP request and response objects passed to handlers."""

from .request import Request
from .response import NOT_FOUND_BODY, ResponseWriter, Transport, not_found

__all__ = ["NOT_FOUND_BODY", "Request", "ResponseWriter", "Transport", "not_found"]
