"""Twitter dashboard widget: API client core."""
from .catalog import CATALOG, Operation, Param
from .client import API_URL, Credentials, TwitterAPIClient
from .exceptions import (
    ResponseAttributeError,
    ResponseFormatError,
    TransportError,
    TwitterError,
    ValidationError,
)
from .response import ResponseMetadata, TwitterResponse
from .transport import RequestsTransport

__version__ = "0.9.0"

__all__ = [
    "API_URL",
    "CATALOG",
    "Credentials",
    "Operation",
    "Param",
    "RequestsTransport",
    "ResponseAttributeError",
    "ResponseFormatError",
    "ResponseMetadata",
    "TransportError",
    "TwitterAPIClient",
    "TwitterError",
    "TwitterResponse",
    "ValidationError",
]
