"""Utility functions for worker-version-deploy."""

from worker_deploy.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
