"""HTTP transport used by TwitterAPIClient.

Performs exactly one request per call. HTTP error statuses are returned
like any other response; only failures to complete the exchange raise.
"""
import logging
from typing import Optional, Tuple

import requests
from requests.auth import HTTPBasicAuth

from .exceptions import TransportError
from .request_builder import Request
from .response import ResponseMetadata

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
DEFAULT_USER_AGENT = 'twdash/0.9'


class RequestsTransport:
    """Executes Requests with the `requests` library"""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None,
                 user_agent: str = DEFAULT_USER_AGENT):
        """
        Initialize transport

        Args:
            timeout: Request timeout in seconds
            session: Session to reuse for every call; by default each call
                opens and closes its own session
            user_agent: User-Agent header sent with every request
        """
        self.timeout = timeout
        self.session = session
        self.user_agent = user_agent

    def execute(self, request: Request,
                credentials: Optional[Tuple[str, str]] = None) -> Tuple[str, ResponseMetadata]:
        """
        Perform one HTTP request

        Args:
            request: Resolved request from the request builder
            credentials: (username, password) for HTTP Basic auth, or None

        Returns:
            Tuple of the raw response body and its metadata

        Raises:
            TransportError: If the request could not be completed
        """
        headers = {'User-Agent': self.user_agent}
        if request.body is not None:
            headers['Content-Type'] = 'application/x-www-form-urlencoded'
        auth = HTTPBasicAuth(*credentials) if credentials is not None else None

        session = self.session or requests.Session()
        try:
            logger.debug("HTTP %s %s (auth=%s)", request.method, request.path, auth is not None)
            response = session.request(
                request.method,
                request.url,
                data=request.body,
                headers=headers,
                auth=auth,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning("Timeout for %s %s: %s", request.method, request.path, e)
            raise TransportError(f"Request timed out: {request.method} {request.path}",
                                 url=request.url, method=request.method) from e
        except requests.exceptions.RequestException as e:
            logger.warning("Request failed for %s %s: %s", request.method, request.path, e)
            raise TransportError(f"Request failed: {request.method} {request.path}: {e}",
                                 url=request.url, method=request.method) from e
        finally:
            if self.session is None:
                session.close()

        metadata = ResponseMetadata.from_requests(response)
        logger.debug("HTTP %s %s -> %d (%.3fs)", request.method, request.path,
                     metadata.http_code, metadata.total_time)
        return response.text, metadata
