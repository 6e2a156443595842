"""
Observability module.

Provides logging configuration, request logging and correlation ID middleware,
and helpers for logging user-supplied text safely.
"""

from ocrchat.observability.logger import configure_logging

__all__ = ["configure_logging"]
