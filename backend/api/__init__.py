"""
API adapter boundary for the ESG contract layer.

Design intent:
- Render every failure a producer raises as an ApiError body.
- Keep routing out of this package; producers install the handlers.
"""
from .handlers import api_error_response, install_exception_handlers

__all__ = ["api_error_response", "install_exception_handlers"]
