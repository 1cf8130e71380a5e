"""Tests for request construction: paths, query strings and bodies."""
from datetime import datetime, timezone
from urllib.parse import parse_qsl, urlsplit

import pytest

from twdash.catalog import CATALOG
from twdash.exceptions import ValidationError
from twdash.request_builder import build_request

BASE = 'http://twitter.test'


def build(name, format=None, identifier=None, **arguments):
    return build_request(CATALOG[name], BASE, format, identifier, **arguments)


class TestPaths:

    def test_format_suffix(self):
        request = build('get_public_timeline', 'rss')
        assert request.url == BASE + '/statuses/public_timeline.rss'
        assert request.format == 'rss'

    def test_default_format_is_json(self):
        assert build('get_replies').url.endswith('/statuses/replies.json')

    def test_numeric_identifier(self):
        request = build('show_status', 'xml', 12345)
        assert request.url == BASE + '/statuses/show/12345.xml'
        assert request.method == 'GET'
        assert request.use_auth is True

    def test_name_identifier_is_percent_encoded(self):
        request = build('show_user', 'json', 'jane doe/x')
        assert request.url == BASE + '/users/show/jane%20doe%2Fx.json'

    def test_none_format_has_no_suffix(self):
        request = build('verify_credentials', 'none')
        assert request.url == BASE + '/account/verify_credentials'
        assert request.format == 'none'

    def test_end_session_always_uses_none(self):
        request = build('end_session')
        assert request.url == BASE + '/account/end_session'
        assert request.use_auth is True
        with pytest.raises(ValidationError):
            build('end_session', 'json')

    def test_base_url_trailing_slash(self):
        request = build_request(CATALOG['test'], BASE + '/', 'json')
        assert request.url == BASE + '/help/test.json'


class TestFormats:

    def test_format_is_case_insensitive(self):
        assert build('get_friends_timeline', 'JSON').url.endswith('friends_timeline.json')

    def test_unsupported_format_lists_allowed_set(self):
        with pytest.raises(ValidationError) as exc_info:
            build('show_status', 'rss', 1)
        assert exc_info.value.name == 'format'
        assert 'json, xml' in str(exc_info.value)


class TestQueryParameters:

    def test_unset_parameters_are_omitted(self):
        request = build('get_user_timeline', 'json', since=None, count=None, page=None)
        assert '?' not in request.url

    def test_declaration_order(self):
        request = build('get_user_timeline', 'json', page=3, count=5,
                        since=datetime(2008, 8, 5, 14, 3, tzinfo=timezone.utc))
        query = parse_qsl(urlsplit(request.url).query)
        assert query == [
            ('since', 'Tue 05 Aug 2008 14:03:00 GMT'),
            ('count', '5'),
            ('page', '3'),
        ]

    def test_explicit_zero_is_sent(self):
        request = build('get_public_timeline', 'json', since_id=0)
        assert request.url.endswith('public_timeline.json?since_id=0')

    def test_count_above_maximum(self):
        with pytest.raises(ValidationError, match="<= 20"):
            build('get_user_timeline', count=21)

    def test_invalid_date(self):
        with pytest.raises(ValidationError) as exc_info:
            build('get_friends_timeline', 'json', since='not-a-date')
        assert exc_info.value.name == 'since'

    def test_first_invalid_parameter_wins(self):
        with pytest.raises(ValidationError) as exc_info:
            build('get_messages', since='nope', since_id=-1, page=-1)
        assert exc_info.value.name == 'since'

    def test_lite_flag(self):
        assert build('get_friends', lite=False).url.endswith('friends.json')
        assert build('get_friends', page=2, lite=True).url.endswith('friends.json?page=2&lite=true')
        with pytest.raises(ValidationError):
            build('get_friends', lite='yes')

    def test_friendship_exists_query(self):
        request = build('friendship_exists', 'none', user_a='a b', user_b='c&d')
        assert request.url == BASE + '/friendships/exists?user_a=a+b&user_b=c%26d'

    def test_unknown_argument(self):
        with pytest.raises(TypeError, match="unexpected arguments: bogus"):
            build('get_replies', bogus=1)


class TestBodies:

    def test_update_status_body(self):
        request = build('update_status', 'json', status='Hello & goodbye')
        assert request.method == 'POST'
        assert request.url == BASE + '/statuses/update.json'
        assert request.body == 'status=Hello+%26+goodbye'

    def test_status_length_limit(self):
        assert build('update_status', status='x' * 140).body == 'status=' + 'x' * 140
        with pytest.raises(ValidationError):
            build('update_status', status='x' * 141)

    def test_status_is_required(self):
        with pytest.raises(ValidationError, match="is required"):
            build('update_status', status='')

    def test_send_message_body(self):
        request = build('send_message', 'xml', user='bob', text='hi there')
        assert request.url == BASE + '/direct_messages/new.xml'
        assert request.body == 'user=bob&text=hi+there'

    def test_destroy_has_empty_body(self):
        request = build('destroy_status', 'json', 99)
        assert request.method == 'POST'
        assert request.url == BASE + '/statuses/destroy/99.json'
        assert request.body == ''

    def test_delivery_device(self):
        assert build('update_delivery_device', device='SMS').body == 'device=sms'
        with pytest.raises(ValidationError, match="sms, im, none"):
            build('update_delivery_device', device='pager')

    def test_get_requests_have_no_body(self):
        assert build('get_replies', page=1).body is None
