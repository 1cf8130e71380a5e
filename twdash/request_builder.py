"""Turns an Operation plus caller arguments into a concrete HTTP request.

All validation happens here, before anything touches the network.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple
from urllib.parse import quote, urlencode

from .catalog import NO_FORMAT, Operation, Param
from .exceptions import ValidationError
from .validators import (
    validate_date_string,
    validate_max_length,
    validate_non_negative_integer,
    validate_option,
    validate_required_string,
)

# Date format understood by the service, e.g. 'Tue 05 Aug 2008 14:03:00 GMT'
DATE_FORMAT = '%a %d %b %Y %H:%M:%S GMT'


@dataclass(frozen=True)
class Request:
    """A fully resolved request, ready for the transport"""
    operation: str
    method: str
    url: str
    format: str
    use_auth: bool
    body: Optional[str] = None

    @property
    def path(self) -> str:
        """URL without the query string (safe to log)"""
        return self.url.split('?', 1)[0]


def resolve_format(operation: Operation, requested: Optional[str] = None) -> str:
    """Validate the requested response format, falling back to the operation default"""
    if requested is None:
        return operation.default_format
    return validate_option('format', requested, operation.formats)


def _is_unset(value: Any) -> bool:
    return value is None or value is False or value == ''


def _encode_param(param: Param, value: Any) -> Optional[str]:
    """Validate one parameter and return its wire value (None = omit)"""
    if _is_unset(value):
        if param.required:
            raise ValidationError(param.name, value, "is required.")
        return None

    if param.kind == 'int':
        return str(validate_non_negative_integer(param.name, value, param.maximum))
    if param.kind == 'date':
        return validate_date_string(param.name, value).strftime(DATE_FORMAT)
    if param.kind == 'flag':
        if value is not True:
            raise ValidationError(param.name, value, "must be a boolean.")
        return 'true'
    if param.kind == 'text':
        return validate_max_length(param.name, value, param.maximum)
    if param.kind in ('string', 'name'):
        return validate_required_string(param.name, value)
    if param.kind == 'choice':
        return validate_option(param.name, value, param.choices)
    raise ValueError(f"Unknown parameter kind: {param.kind}")


def _encode_identifier(param: Param, value: Any) -> str:
    encoded = _encode_param(param, value)
    if param.kind == 'name':
        return quote(encoded, safe='')
    return encoded


def build_request(operation: Operation, base_url: str, format: Optional[str] = None,
                  identifier: Any = None, **arguments: Any) -> Request:
    """Build the Request for one call of `operation`.

    Args:
        operation: Catalog entry describing the call
        base_url: Scheme and host of the service, e.g. 'http://twitter.com'
        format: Requested response format (case-insensitive); None for the default
        identifier: Positional path identifier (status id or screen name)
        **arguments: Values for the operation's declared parameters

    Returns:
        The resolved Request

    Raises:
        ValidationError: If the format or any argument is invalid
        TypeError: If an argument is not declared by the operation
    """
    declared = {p.name for p in operation.params}
    unknown = sorted(set(arguments) - declared)
    if unknown:
        raise TypeError(f"{operation.name}() got unexpected arguments: {', '.join(unknown)}")

    requested_format = resolve_format(operation, format)

    path = operation.path
    if operation.identifier is not None:
        path += '/' + _encode_identifier(operation.identifier, identifier)
    if requested_format != NO_FORMAT:
        path += f'.{requested_format}'

    pairs: List[Tuple[str, str]] = []
    for param in operation.params:
        encoded = _encode_param(param, arguments.get(param.name))
        if encoded is not None:
            pairs.append((param.name, encoded))

    url = base_url.rstrip('/') + path
    body = None
    if operation.method == 'POST':
        body = urlencode(pairs)
    elif pairs:
        url += '?' + urlencode(pairs)

    return Request(
        operation=operation.name,
        method=operation.method,
        url=url,
        format=requested_format,
        use_auth=operation.requires_auth,
        body=body,
    )
