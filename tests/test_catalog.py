"""Tests for the operation catalog."""
import pytest

from twdash.catalog import (
    CATALOG,
    ENTITY_FORMATS,
    STATUS_CHECK_FORMATS,
    TIMELINE_FORMATS,
    get_operation,
)
from twdash.client import TwitterAPIClient


class TestCatalog:

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            CATALOG['bogus'] = CATALOG['test']

    def test_every_operation_has_a_client_method(self):
        for name in CATALOG:
            assert callable(getattr(TwitterAPIClient, name, None)), name

    def test_only_public_timeline_and_featured_skip_auth(self):
        unauthenticated = {name for name, op in CATALOG.items() if not op.requires_auth}
        assert unauthenticated == {'get_public_timeline', 'get_featured'}

    def test_mutating_operations_are_post(self):
        posts = {name for name, op in CATALOG.items() if op.method == 'POST'}
        for name in posts:
            assert name.split('_')[0] in (
                'update', 'create', 'send', 'destroy', 'follow', 'leave', 'block', 'unblock'
            ), name
        assert 'update_status' in posts
        assert 'send_message' in posts
        assert 'get_friends_timeline' not in posts

    def test_format_sets(self):
        assert CATALOG['get_user_timeline'].formats == TIMELINE_FORMATS
        assert CATALOG['show_status'].formats == ENTITY_FORMATS
        assert CATALOG['verify_credentials'].formats == STATUS_CHECK_FORMATS
        assert CATALOG['end_session'].formats == ('none',)
        assert CATALOG['end_session'].default_format == 'none'

    def test_all_formats_are_known(self):
        known = {'json', 'xml', 'rss', 'atom', 'none'}
        for op in CATALOG.values():
            assert op.formats
            assert set(op.formats) <= known
            assert op.default_format in op.formats

    def test_unknown_operation(self):
        with pytest.raises(KeyError, match="Unknown operation"):
            get_operation('get_everything')
