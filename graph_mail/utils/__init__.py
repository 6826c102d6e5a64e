"""Utility modules."""

from graph_mail.utils.logger import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
]
