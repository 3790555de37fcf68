"""Shared utilities used across llm-websearch components."""

from .logging import LogConfig, configure_logging

__all__ = ["LogConfig", "configure_logging"]
