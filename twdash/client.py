"""
Client for the Twitter REST API used by the dashboard widget.

Every public method validates its arguments, builds one request from the
operation catalog, runs it through the transport and returns a
TwitterResponse. HTTP errors are returned, not raised; check
``response.is_error()``.
"""
import logging
import time
from datetime import datetime
from typing import NamedTuple, Optional, Union

from .catalog import get_operation
from .exceptions import TransportError
from .request_builder import Request, build_request
from .response import TwitterResponse
from .transport import RequestsTransport

logger = logging.getLogger(__name__)

API_URL = 'http://twitter.com'

DateArg = Union[str, datetime, None]


class Credentials(NamedTuple):
    username: str
    password: str


class TwitterAPIClient:
    """Client for reading timelines and posting updates to Twitter.

    Not safe to share between threads: the last request time and last
    response are updated by every call.
    """

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None,
                 base_url: str = API_URL, transport: Optional[RequestsTransport] = None,
                 timeout: float = 10):
        """
        Initialize API client

        Args:
            username: Twitter username or email address
            password: Twitter password
            base_url: Base URL of the API (e.g. 'http://twitter.com')
            transport: Transport performing the HTTP calls; a RequestsTransport
                with `timeout` is created when omitted
            timeout: Request timeout in seconds for the default transport
        """
        self.base_url = base_url.rstrip('/')
        self.transport = transport or RequestsTransport(timeout=timeout)
        self._credentials = Credentials('', '')
        self._last_request_time = 0
        self._last_response: Optional[TwitterResponse] = None
        self.set_auth(username, password)

    def set_auth(self, username: Optional[str], password: Optional[str]) -> 'TwitterAPIClient':
        """Replace the credentials used for authenticated calls; returns the client"""
        self._credentials = Credentials(username or '', password or '')
        return self

    @property
    def username(self) -> str:
        return self._credentials.username

    def get_last_request_time(self) -> int:
        """Epoch seconds at which the last request was started (0 if none yet)"""
        return self._last_request_time

    def get_last_response(self) -> Optional[TwitterResponse]:
        """The response to the last completed request, if any"""
        return self._last_response

    def _call(self, name: str, format: Optional[str] = None, identifier=None,
              **arguments) -> TwitterResponse:
        operation = get_operation(name)
        request = build_request(operation, self.base_url, format, identifier, **arguments)
        return self._make_request(request)

    def _make_request(self, request: Request) -> TwitterResponse:
        """Run a request and store the response as the last response.

        Transport failures propagate as TransportError and leave the last
        response untouched.
        """
        logger.info("%s: %s %s", request.operation, request.method, request.path)
        credentials = self._credentials if request.use_auth else None

        self._last_request_time = int(time.time())
        body, metadata = self.transport.execute(request, credentials)

        response = TwitterResponse(body, metadata, request.format)
        if response.is_error():
            logger.warning("%s returned HTTP %d", request.operation, metadata.http_code)
        self._last_response = response
        return response

    # Status methods

    def get_public_timeline(self, format: str = 'json',
                            since_id: Optional[int] = None) -> TwitterResponse:
        """
        Returns the 20 most recent statuses from non-protected users. No authentication.

        Args:
            format: json, xml, rss or atom
            since_id: Only statuses with an id greater than this
        """
        return self._call('get_public_timeline', format, since_id=since_id)

    def get_friends_timeline(self, format: str = 'json', since: DateArg = None,
                             page: Optional[int] = None) -> TwitterResponse:
        """
        Returns the 20 most recent statuses posted by the user and their friends.

        Args:
            format: json, xml, rss or atom
            since: Only statuses created after this date
            page: Page of results to retrieve
        """
        return self._call('get_friends_timeline', format, since=since, page=page)

    def get_user_timeline(self, format: str = 'json', since: DateArg = None,
                          count: Optional[int] = None,
                          page: Optional[int] = None) -> TwitterResponse:
        """
        Returns the most recent statuses posted by the authenticating user.

        Args:
            format: json, xml, rss or atom
            since: Only statuses created after this date
            count: Number of statuses to retrieve, at most 20
            page: Page of results to retrieve
        """
        return self._call('get_user_timeline', format, since=since, count=count, page=page)

    def show_status(self, id: int, format: str = 'json') -> TwitterResponse:
        """Returns a single status, specified by id"""
        return self._call('show_status', format, id)

    def update_status(self, status: str, format: str = 'json') -> TwitterResponse:
        """
        Updates the authenticating user's status.

        Args:
            status: Text of the update, at most 140 characters
            format: json or xml
        """
        return self._call('update_status', format, status=status)

    def get_replies(self, format: str = 'json', page: Optional[int] = None) -> TwitterResponse:
        """Returns the 20 most recent @replies for the authenticating user"""
        return self._call('get_replies', format, page=page)

    def destroy_status(self, id: int, format: str = 'json') -> TwitterResponse:
        """Destroys a status owned by the authenticating user"""
        return self._call('destroy_status', format, id)

    # User methods

    def get_friends(self, format: str = 'json', page: Optional[int] = None,
                    lite: bool = False) -> TwitterResponse:
        """
        Returns the authenticating user's friends, each with their current status.

        Args:
            format: json or xml
            page: Page of results to retrieve
            lite: Leave out the status of each user
        """
        return self._call('get_friends', format, page=page, lite=lite)

    def get_followers(self, format: str = 'json', page: Optional[int] = None,
                      lite: bool = False) -> TwitterResponse:
        """Returns the authenticating user's followers, each with their current status"""
        return self._call('get_followers', format, page=page, lite=lite)

    def get_featured(self, format: str = 'json') -> TwitterResponse:
        """Returns the users currently featured on the site. No authentication."""
        return self._call('get_featured', format)

    def show_user(self, user: str, format: str = 'json') -> TwitterResponse:
        """Returns extended information about a user, by id or screen name"""
        return self._call('show_user', format, user)

    # Direct message methods

    def get_messages(self, format: str = 'json', since: DateArg = None,
                     since_id: Optional[int] = None,
                     page: Optional[int] = None) -> TwitterResponse:
        """Returns direct messages sent to the authenticating user"""
        return self._call('get_messages', format, since=since, since_id=since_id, page=page)

    def get_sent_messages(self, format: str = 'json', since: DateArg = None,
                          since_id: Optional[int] = None,
                          page: Optional[int] = None) -> TwitterResponse:
        """Returns direct messages sent by the authenticating user"""
        return self._call('get_sent_messages', format, since=since, since_id=since_id, page=page)

    def send_message(self, user: str, text: str, format: str = 'json') -> TwitterResponse:
        """
        Sends a direct message to a user.

        Args:
            user: Id or screen name of the recipient
            text: Message text, at most 140 characters
            format: json or xml
        """
        return self._call('send_message', format, user=user, text=text)

    def destroy_message(self, id: int, format: str = 'json') -> TwitterResponse:
        """Destroys a direct message received by the authenticating user"""
        return self._call('destroy_message', format, id)

    # Friendship methods

    def create_friendship(self, user: str, format: str = 'json') -> TwitterResponse:
        """Befriends the given user"""
        return self._call('create_friendship', format, user)

    def destroy_friendship(self, user: str, format: str = 'json') -> TwitterResponse:
        """Discontinues friendship with the given user"""
        return self._call('destroy_friendship', format, user)

    def friendship_exists(self, user_a: str, user_b: str, format: str = 'json') -> TwitterResponse:
        """
        Tests whether user_a follows user_b.

        With format 'none' the call has no extension; read the status code.
        """
        return self._call('friendship_exists', format, user_a=user_a, user_b=user_b)

    # Account methods

    def verify_credentials(self, format: str = 'json') -> TwitterResponse:
        """
        Checks the stored credentials.

        With format 'none' only the status code matters: 200 if valid, 401 otherwise.
        """
        return self._call('verify_credentials', format)

    def end_session(self) -> TwitterResponse:
        """Ends the session of the authenticating user"""
        return self._call('end_session')

    def get_archive(self, format: str = 'json', since: DateArg = None,
                    since_id: Optional[int] = None,
                    page: Optional[int] = None) -> TwitterResponse:
        """Returns 80 statuses per page for the authenticating user"""
        return self._call('get_archive', format, since=since, since_id=since_id, page=page)

    def update_location(self, location: str, format: str = 'json') -> TwitterResponse:
        """Updates the location attribute of the authenticating user"""
        return self._call('update_location', format, location=location)

    def update_delivery_device(self, device: str, format: str = 'json') -> TwitterResponse:
        """
        Sets which device Twitter delivers updates to.

        Args:
            device: sms, im or none
            format: json or xml
        """
        return self._call('update_delivery_device', format, device=device)

    # Favorite methods

    def get_favorites(self, format: str = 'json', page: Optional[int] = None) -> TwitterResponse:
        """Returns the 20 most recent favorite statuses of the authenticating user"""
        return self._call('get_favorites', format, page=page)

    def create_favorite(self, id: int, format: str = 'json') -> TwitterResponse:
        return self._call('create_favorite', format, id)

    def destroy_favorite(self, id: int, format: str = 'json') -> TwitterResponse:
        return self._call('destroy_favorite', format, id)

    # Notification methods

    def follow(self, user: str, format: str = 'json') -> TwitterResponse:
        """Enables notifications for updates from the given user"""
        return self._call('follow', format, user)

    def leave(self, user: str, format: str = 'json') -> TwitterResponse:
        """Disables notifications for updates from the given user"""
        return self._call('leave', format, user)

    # Block methods

    def block(self, user: str, format: str = 'json') -> TwitterResponse:
        return self._call('block', format, user)

    def unblock(self, user: str, format: str = 'json') -> TwitterResponse:
        return self._call('unblock', format, user)

    # Help methods

    def test(self, format: str = 'json') -> TwitterResponse:
        """Returns the string "ok" with a 200 status code"""
        return self._call('test', format)

    def downtime_schedule(self, format: str = 'json') -> TwitterResponse:
        """Returns the same text displayed on twitter.com during scheduled maintenance"""
        return self._call('downtime_schedule', format)

    def health_check(self) -> bool:
        """
        Check if the service is reachable

        Returns:
            True if the help/test call succeeds, False otherwise
        """
        try:
            response = self.test()
        except TransportError as e:
            logger.warning("Health check failed: %s", e)
            return False
        if response.is_error():
            logger.warning("Health check: service returned HTTP %d", response.http_code)
            return False
        return True
