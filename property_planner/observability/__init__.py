"""Structured logging package."""

from property_planner.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
