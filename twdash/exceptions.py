"""Errors raised by the Twitter API client.

HTTP-level failures (4xx/5xx) are not exceptions: they come back as a
normal TwitterResponse whose is_error() is True.
"""
from typing import Any


class TwitterError(Exception):
    """Base class for all client errors"""


class ValidationError(TwitterError, ValueError):
    """A caller-supplied parameter failed validation before any request was made"""

    def __init__(self, name: str, value: Any, constraint: str):
        self.name = name
        self.value = value
        self.constraint = constraint
        super().__init__(f"Invalid parameter ({name}): {value!r}; {constraint}")


class TransportError(TwitterError):
    """The HTTP request could not be completed (DNS, connection, timeout)"""

    def __init__(self, message: str, url: str = '', method: str = ''):
        self.url = url
        self.method = method
        super().__init__(message)


class ResponseAttributeError(TwitterError, AttributeError):
    """Requested metadata attribute does not exist on the response"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Response property '{name}' does not exist!")


class ResponseFormatError(TwitterError):
    """Response body cannot be read in the requested structured form"""
