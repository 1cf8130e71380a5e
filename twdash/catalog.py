"""Read-only table of the remote operations the client exposes.

Every public method on TwitterAPIClient maps to exactly one Operation here.
The table is built once at import time and cannot be modified.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .validators import STATUS_MAXLENGTH

# Response formats accepted by the service
TIMELINE_FORMATS = ('json', 'xml', 'rss', 'atom')
ENTITY_FORMATS = ('json', 'xml')
STATUS_CHECK_FORMATS = ('json', 'xml', 'none')
NO_FORMAT = 'none'

MAX_COUNT = 20
DELIVERY_DEVICES = ('sms', 'im', 'none')


@dataclass(frozen=True)
class Param:
    """One named parameter of an operation.

    kind is one of:
        int    - non-negative integer, optional unless required
        date   - date string or datetime, serialized in GMT
        flag   - boolean, sent as 'true' only when set
        text   - length-limited free text (maximum = character limit)
        string - non-empty identifier such as a screen name
        name   - like string, but percent-encoded into the path
        choice - one of `choices`, case-insensitive
    """
    name: str
    kind: str
    required: bool = False
    maximum: Optional[int] = None
    choices: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Operation:
    """Static description of a single remote call"""
    name: str
    path: str
    formats: Tuple[str, ...]
    method: str = 'GET'
    requires_auth: bool = True
    identifier: Optional[Param] = None
    params: Tuple[Param, ...] = ()
    default_format: str = 'json'


# Reusable parameter definitions
_SINCE = Param('since', 'date')
_SINCE_ID = Param('since_id', 'int')
_PAGE = Param('page', 'int')
_COUNT = Param('count', 'int', maximum=MAX_COUNT)
_LITE = Param('lite', 'flag')
_STATUS_ID = Param('id', 'int', required=True)
_USER = Param('user', 'name', required=True)


def _build_catalog() -> Mapping[str, Operation]:
    operations = [
        # Status methods
        Operation('get_public_timeline', '/statuses/public_timeline', TIMELINE_FORMATS,
                  requires_auth=False, params=(_SINCE_ID,)),
        Operation('get_friends_timeline', '/statuses/friends_timeline', TIMELINE_FORMATS,
                  params=(_SINCE, _PAGE)),
        Operation('get_user_timeline', '/statuses/user_timeline', TIMELINE_FORMATS,
                  params=(_SINCE, _COUNT, _PAGE)),
        Operation('show_status', '/statuses/show', ENTITY_FORMATS, identifier=_STATUS_ID),
        Operation('update_status', '/statuses/update', ENTITY_FORMATS, method='POST',
                  params=(Param('status', 'text', required=True, maximum=STATUS_MAXLENGTH),)),
        Operation('get_replies', '/statuses/replies', TIMELINE_FORMATS, params=(_PAGE,)),
        Operation('destroy_status', '/statuses/destroy', ENTITY_FORMATS, method='POST',
                  identifier=_STATUS_ID),

        # User methods
        Operation('get_friends', '/statuses/friends', ENTITY_FORMATS, params=(_PAGE, _LITE)),
        Operation('get_followers', '/statuses/followers', ENTITY_FORMATS, params=(_PAGE, _LITE)),
        Operation('get_featured', '/statuses/featured', ENTITY_FORMATS, requires_auth=False),
        Operation('show_user', '/users/show', ENTITY_FORMATS, identifier=_USER),

        # Direct message methods
        Operation('get_messages', '/direct_messages', TIMELINE_FORMATS,
                  params=(_SINCE, _SINCE_ID, _PAGE)),
        Operation('get_sent_messages', '/direct_messages/sent', ENTITY_FORMATS,
                  params=(_SINCE, _SINCE_ID, _PAGE)),
        Operation('send_message', '/direct_messages/new', ENTITY_FORMATS, method='POST',
                  params=(Param('user', 'string', required=True),
                          Param('text', 'text', required=True, maximum=STATUS_MAXLENGTH))),
        Operation('destroy_message', '/direct_messages/destroy', ENTITY_FORMATS, method='POST',
                  identifier=_STATUS_ID),

        # Friendship methods
        Operation('create_friendship', '/friendships/create', ENTITY_FORMATS, method='POST',
                  identifier=_USER),
        Operation('destroy_friendship', '/friendships/destroy', ENTITY_FORMATS, method='POST',
                  identifier=_USER),
        Operation('friendship_exists', '/friendships/exists', STATUS_CHECK_FORMATS,
                  params=(Param('user_a', 'string', required=True),
                          Param('user_b', 'string', required=True))),

        # Account methods
        Operation('verify_credentials', '/account/verify_credentials', STATUS_CHECK_FORMATS),
        Operation('end_session', '/account/end_session', (NO_FORMAT,), default_format=NO_FORMAT),
        Operation('get_archive', '/account/archive', ENTITY_FORMATS,
                  params=(_SINCE, _SINCE_ID, _PAGE)),
        Operation('update_location', '/account/update_location', ENTITY_FORMATS, method='POST',
                  params=(Param('location', 'string', required=True),)),
        Operation('update_delivery_device', '/account/update_delivery_device', ENTITY_FORMATS,
                  method='POST',
                  params=(Param('device', 'choice', required=True, choices=DELIVERY_DEVICES),)),

        # Favorite methods
        Operation('get_favorites', '/favorites', TIMELINE_FORMATS, params=(_PAGE,)),
        Operation('create_favorite', '/favorites/create', ENTITY_FORMATS, method='POST',
                  identifier=_STATUS_ID),
        Operation('destroy_favorite', '/favorites/destroy', ENTITY_FORMATS, method='POST',
                  identifier=_STATUS_ID),

        # Notification methods
        Operation('follow', '/notifications/follow', ENTITY_FORMATS, method='POST',
                  identifier=_USER),
        Operation('leave', '/notifications/leave', ENTITY_FORMATS, method='POST',
                  identifier=_USER),

        # Block methods
        Operation('block', '/blocks/create', ENTITY_FORMATS, method='POST', identifier=_USER),
        Operation('unblock', '/blocks/destroy', ENTITY_FORMATS, method='POST', identifier=_USER),

        # Help methods
        Operation('test', '/help/test', ENTITY_FORMATS),
        Operation('downtime_schedule', '/help/downtime_schedule', ENTITY_FORMATS),
    ]

    table: Dict[str, Operation] = {}
    for op in operations:
        if op.name in table:
            raise RuntimeError(f"Duplicate operation in catalog: {op.name}")
        table[op.name] = op
    return MappingProxyType(table)


CATALOG: Mapping[str, Operation] = _build_catalog()


def get_operation(name: str) -> Operation:
    """Look up an operation by name, raising KeyError for unknown names"""
    try:
        return CATALOG[name]
    except KeyError:
        raise KeyError(f"Unknown operation: {name}") from None
