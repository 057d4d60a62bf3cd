"""
Event Handlers

Infrastructure subscribers for domain events.
"""

from .logging_handler import LoggingEventHandler

__all__ = ["LoggingEventHandler"]
