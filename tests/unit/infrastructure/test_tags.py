"""Tests for tag helpers."""

import pytest

from aws_resource_adapters.infrastructure.tags import diff_tags, merge_tags, resource_tags, strip_ignored


@pytest.mark.unit
class TestTagHelpers:

    def test_strip_ignored(self):
        tags = {'aws:cloudformation:stack-name': 's', 'env': 'dev'}
        assert strip_ignored(tags) == {'env': 'dev'}
        assert strip_ignored(None) == {}

    def test_merge_resource_tags_win(self):
        assert merge_tags({'team': 'a', 'env': 'default'}, {'env': 'dev'}) == {'team': 'a', 'env': 'dev'}

    def test_resource_tags_exclude_unchanged_defaults(self):
        all_tags = {'team': 'a', 'env': 'dev', 'owner': 'me'}
        defaults = {'team': 'a', 'owner': 'someone-else'}
        assert resource_tags(all_tags, defaults) == {'env': 'dev', 'owner': 'me'}

    def test_diff(self):
        to_set, to_remove = diff_tags({'a': '1', 'b': '2', 'c': '3'}, {'a': '1', 'b': '20', 'd': '4'})
        assert to_set == {'b': '20', 'd': '4'}
        assert to_remove == ['c']
