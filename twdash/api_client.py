"""Compatibility wrapper so hosts that import `api_client` find TwitterAPIClient.

This file re-exports the implementation from `client.py`, which contains
the full API client.
"""
from .client import Credentials, TwitterAPIClient
from .response import TwitterResponse

__all__ = ["Credentials", "TwitterAPIClient", "TwitterResponse"]
