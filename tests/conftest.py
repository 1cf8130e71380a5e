"""
Shared pytest fixtures for the twdash tests.

The fake transport stands in for the network: it records every request
it is given and answers with a canned body and status code.
"""
from typing import List, Optional, Tuple

import pytest

from twdash.client import TwitterAPIClient
from twdash.request_builder import Request
from twdash.response import ResponseMetadata


class FakeTransport:
    """Records requests and returns a fixed response"""

    def __init__(self, body: str = '[]', http_code: int = 200,
                 content_type: str = 'application/json', error: Optional[Exception] = None):
        self.body = body
        self.http_code = http_code
        self.content_type = content_type
        self.error = error
        self.calls: List[Tuple[Request, Optional[Tuple[str, str]]]] = []

    def execute(self, request, credentials=None):
        self.calls.append((request, credentials))
        if self.error is not None:
            raise self.error
        metadata = ResponseMetadata(
            http_code=self.http_code,
            content_type=self.content_type,
            total_time=0.05,
            url=request.url,
        )
        return self.body, metadata

    @property
    def last_request(self) -> Request:
        return self.calls[-1][0]

    @property
    def last_credentials(self):
        return self.calls[-1][1]


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return TwitterAPIClient('alice', 'secret', base_url='http://twitter.test', transport=transport)
