"""Response wrapper returned by every TwitterAPIClient operation"""
import json
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .exceptions import ResponseAttributeError, ResponseFormatError


@dataclass(frozen=True)
class ResponseMetadata:
    """Transport attributes collected for one HTTP exchange.

    Headers are stored as a read-only mapping.
    """
    http_code: int
    content_type: str = ''
    total_time: float = 0.0
    url: str = ''
    reason: str = ''
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

    @classmethod
    def from_requests(cls, response) -> 'ResponseMetadata':
        """Collect metadata from a requests.Response"""
        return cls(
            http_code=response.status_code,
            content_type=response.headers.get('Content-Type', ''),
            total_time=response.elapsed.total_seconds() if response.elapsed else 0.0,
            url=response.url or '',
            reason=response.reason or '',
            headers=dict(response.headers),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result['headers'] = dict(self.headers)
        return result

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from a plain dict
        return (self.__class__, (self.http_code, self.content_type, self.total_time,
                                 self.url, self.reason, dict(self.headers)))


METADATA_FIELDS = frozenset(f.name for f in fields(ResponseMetadata))


class TwitterResponse:
    """Read-only view of a response body, its declared format and its metadata.

    The format is whatever the caller asked for; the body is never sniffed.
    Metadata fields can be read as attributes (``response.http_code``);
    asking for anything else raises ResponseAttributeError.
    """

    __slots__ = ('_data', '_metadata', '_format')

    def __init__(self, data: str, metadata: ResponseMetadata, format: str):
        object.__setattr__(self, '_data', data)
        object.__setattr__(self, '_metadata', metadata)
        object.__setattr__(self, '_format', format)

    def __setattr__(self, name, value):
        raise AttributeError("TwitterResponse is read-only")

    def __delattr__(self, name):
        raise AttributeError("TwitterResponse is read-only")

    def __reduce__(self):
        # __setattr__ always raises, so copy/pickle go through the constructor
        return (TwitterResponse, (self._data, self._metadata, self._format))

    def __getattr__(self, name):
        # Only reached when normal lookup fails
        if name.startswith('_'):
            raise AttributeError(name)
        return self.get(name)

    def get(self, name: str) -> Any:
        """Return the body ('data') or a metadata field by name"""
        if name == 'data':
            return self._data
        if name in METADATA_FIELDS:
            return getattr(self._metadata, name)
        raise ResponseAttributeError(name)

    def has(self, name: str) -> bool:
        return name == 'data' or name in METADATA_FIELDS

    @property
    def data(self) -> str:
        return self._data

    @property
    def format(self) -> str:
        return self._format

    @property
    def metadata(self) -> ResponseMetadata:
        return self._metadata

    def get_data(self) -> str:
        """Returns the content body (if any) returned by the service"""
        return self._data

    def is_error(self) -> bool:
        """True for 4xx and 5xx status codes"""
        return self._metadata.http_code // 100 in (4, 5)

    def is_json(self) -> bool:
        return self._format == 'json'

    def is_xml(self) -> bool:
        return self._format == 'xml'

    def json(self) -> Any:
        """Parse the body of a JSON response.

        Raises:
            ResponseFormatError: If the response was not requested as JSON
                or the body is not valid JSON
        """
        if not self.is_json():
            raise ResponseFormatError(f"Response format is '{self._format}', not 'json'")
        try:
            return json.loads(self._data)
        except ValueError as e:
            raise ResponseFormatError(f"Response body is not valid JSON: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Metadata fields plus the raw body under 'data'"""
        result = self._metadata.to_dict()
        result['data'] = self._data
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __repr__(self) -> str:
        return (f"TwitterResponse(http_code={self._metadata.http_code}, "
                f"format={self._format!r}, length={len(self._data or '')})")
