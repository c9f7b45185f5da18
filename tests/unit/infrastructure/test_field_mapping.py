"""Tests for declarative field mapping."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from aws_resource_adapters.domain.base import Attribute, ResourceModel
from aws_resource_adapters.infrastructure.exceptions import ConfigurationError
from aws_resource_adapters.infrastructure.mapping import (
    FieldMapping,
    NamingConvention,
    convert_name,
    copy,
    empty_to_none,
    format_timestamp,
    ignore,
    rename,
    tags_from_list,
    tags_to_list,
)


class WidgetModel(ResourceModel):
    widget_name: str = Attribute(requires_replace=True)
    size: Optional[int] = Attribute(None)
    note: Optional[str] = Attribute(None)
    arn: Optional[str] = Attribute(None, computed=True)


@pytest.mark.unit
class TestNaming:

    def test_pascal_case(self):
        assert convert_name('tenant_name', NamingConvention.PASCAL) == 'TenantName'

    def test_camel_case(self):
        assert convert_name('allowed_columns', NamingConvention.CAMEL) == 'allowedColumns'
        assert convert_name('id', NamingConvention.CAMEL) == 'id'


@pytest.mark.unit
class TestFieldMapping:

    def setup_method(self):
        self.mapping = FieldMapping([
            copy('widget_name'),
            copy('size'),
            rename('note', 'Details.Note', null_value=''),
            rename('arn', 'WidgetArn'),
            rename('tags_all', 'Tags', to_remote=tags_to_list, from_remote=tags_from_list, omit_empty=True),
            ignore('tags'),
        ])

    def test_expand_skips_unset_values(self):
        params = self.mapping.expand(WidgetModel(widget_name='w'), only={'widget_name', 'size'})
        assert params == {'WidgetName': 'w'}

    def test_expand_nested_path_and_null_value(self):
        params = self.mapping.expand(WidgetModel(widget_name='w', size=3))
        assert params == {'WidgetName': 'w', 'Size': 3, 'Details': {'Note': ''}}

    def test_expand_converts_values(self):
        record = WidgetModel(widget_name='w', note='hello', tags_all={'b': '2', 'a': '1'})
        params = self.mapping.expand(record)
        assert params['Details'] == {'Note': 'hello'}
        assert params['Tags'] == [{'Key': 'a', 'Value': '1'}, {'Key': 'b', 'Value': '2'}]

    def test_expand_only(self):
        params = self.mapping.expand(WidgetModel(widget_name='w', size=3), only={'size'})
        assert params == {'Size': 3}

    def test_flatten_drops_unknown_and_missing_keys(self):
        values = self.mapping.flatten({
            'WidgetName': 'w',
            'WidgetArn': 'arn:w',
            'Details': {'Note': 'n'},
            'Unexpected': 'ignored',
        })
        assert values == {'widget_name': 'w', 'arn': 'arn:w', 'note': 'n'}

    def test_flatten_complete_payload_unsets_missing_keys(self):
        values = self.mapping.flatten({'WidgetName': 'w', 'Unexpected': 'ignored'}, complete=True)

        assert values['widget_name'] == 'w'
        assert values['arn'] is None
        assert values['note'] is None
        assert 'tags' not in values

    def test_flatten_applies_converters(self):
        values = self.mapping.flatten({'Tags': [{'Key': 'k', 'Value': 'v'}]})
        assert values == {'tags_all': {'k': 'v'}}

    def test_duplicate_entries_rejected(self):
        with pytest.raises(ConfigurationError, match='Duplicate'):
            FieldMapping([copy('size'), copy('size')])

    def test_rename_without_remote_name_rejected(self):
        with pytest.raises(ConfigurationError):
            FieldMapping([rename('size', '')])


@pytest.mark.unit
class TestDefinitionTimeValidation:

    def test_missing_required_attribute(self):
        mapping = FieldMapping([copy('size')])
        with pytest.raises(ConfigurationError, match='widget_name'):
            mapping.validate_for(WidgetModel, WidgetModel.required_attributes(), 'create')

    def test_ignored_required_attribute_is_missing(self):
        mapping = FieldMapping([ignore('widget_name')])
        with pytest.raises(ConfigurationError, match='widget_name'):
            mapping.validate_for(WidgetModel, WidgetModel.required_attributes(), 'create')

    def test_unknown_attribute(self):
        mapping = FieldMapping([copy('widget_name'), copy('colour')])
        with pytest.raises(ConfigurationError, match='colour'):
            mapping.validate_for(WidgetModel, WidgetModel.required_attributes(), 'create')


@pytest.mark.unit
class TestConverters:

    def test_format_timestamp_utc(self):
        value = datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == '2024-01-01T00:00:00Z'

    def test_format_timestamp_naive_is_utc(self):
        assert format_timestamp(datetime(2024, 1, 1)) == '2024-01-01T00:00:00Z'

    def test_format_timestamp_rejects_other_types(self):
        with pytest.raises(TypeError):
            format_timestamp(12345)

    def test_empty_to_none(self):
        assert empty_to_none('') is None
        assert empty_to_none('kept') == 'kept'
