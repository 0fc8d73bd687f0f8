"""AWS client wrapper module."""

from .aws_client import TaggingClient, AWSAPIError

__all__ = ["TaggingClient", "AWSAPIError"]
