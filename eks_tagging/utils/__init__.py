"""Utility modules for the EKS tag reconciler."""

from .cloudwatch_logger import CloudWatchHandler, configure_cloudwatch_logging
from .logging_config import configure_logging

__all__ = [
    "CloudWatchHandler",
    "configure_cloudwatch_logging",
    "configure_logging",
]
