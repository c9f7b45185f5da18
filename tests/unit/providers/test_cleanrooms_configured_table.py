"""Tests for the Clean Rooms configured table resource."""

import pytest

from aws_resource_adapters.domain.configured_table import TableReference
from aws_resource_adapters.domain.core.exceptions import ResourceNotFoundError, ValidationError
from aws_resource_adapters.infrastructure.adapters import ResourceAdapter
from aws_resource_adapters.infrastructure.exceptions import RemoteError
from aws_resource_adapters.providers.aws.resources import CONFIGURED_TABLE
from aws_resource_adapters.providers.aws.resources.cleanrooms_configured_table import MAX_PAGE_SIZE

TABLE_ARN = 'arn:aws:cleanrooms:us-east-1:123456789012:configuredtable/ct-1'


@pytest.mark.unit
@pytest.mark.aws
class TestConfiguredTable:

    def _adapter(self, client, **kwargs):
        return ResourceAdapter(CONFIGURED_TABLE, client, **kwargs)

    def test_definition_timeouts(self):
        assert CONFIGURED_TABLE.timeouts.create == 60
        assert CONFIGURED_TABLE.timeouts.update == 60
        assert CONFIGURED_TABLE.timeouts.delete == 60

    def test_create_request(self, cleanrooms_client, configured_table):
        adapter = self._adapter(cleanrooms_client, default_tags={'team': 'data'})

        created = adapter.create(configured_table)

        cleanrooms_client.create_configured_table.assert_called_once_with(
            name='orders',
            description='order facts',
            analysisMethod='DIRECT_QUERY',
            allowedColumns=['amount', 'order_id'],
            tableReference={'glue': {'databaseName': 'sales', 'tableName': 'orders'}},
            tags={'team': 'data'},
        )
        assert created.id == 'ct-1'
        assert created.arn == TABLE_ARN
        assert created.create_time == '2024-01-01T00:00:00Z'
        assert created.update_time == '2024-01-02T00:00:00Z'

    def test_create_rejects_invalid_record_without_calling(self, cleanrooms_client, configured_table):
        invalid = configured_table.model_construct(
            **{**dict(configured_table), 'analysis_method': 'CUSTOM'}
        )
        with pytest.raises(ValidationError):
            self._adapter(cleanrooms_client).create(invalid)
        cleanrooms_client.create_configured_table.assert_not_called()

    def test_read_has_no_drift(self, cleanrooms_client, configured_table):
        adapter = self._adapter(cleanrooms_client)
        created = adapter.create(configured_table)

        assert adapter.read(created) == created
        cleanrooms_client.get_configured_table.assert_called_once_with(configuredTableIdentifier='ct-1')
        cleanrooms_client.list_tags_for_resource.assert_called_once_with(resourceArn=TABLE_ARN)

    def test_import_by_id(self, cleanrooms_client):
        record = self._adapter(cleanrooms_client).import_state('ct-1')

        assert record.id == 'ct-1'
        assert record.name == 'orders'
        assert record.allowed_columns == ['amount', 'order_id']
        assert record.table_reference == TableReference(database_name='sales', table_name='orders')

    def test_import_not_found(self, cleanrooms_client, client_error):
        cleanrooms_client.get_configured_table.side_effect = client_error(
            'ResourceNotFoundException', 'GetConfiguredTable'
        )
        with pytest.raises(ResourceNotFoundError):
            self._adapter(cleanrooms_client).import_state('ct-missing')

    def test_update_sends_only_mutable_changes(self, cleanrooms_client, configured_table):
        adapter = self._adapter(cleanrooms_client)
        previous = adapter.create(configured_table)

        desired = previous.model_copy(update={
            'name': 'orders-v2',
            'allowed_columns': ['order_id'],
        })
        adapter.update(desired, previous)

        assert adapter.requires_replace(desired, previous) == {'allowed_columns'}
        cleanrooms_client.update_configured_table.assert_called_once_with(
            configuredTableIdentifier='ct-1', name='orders-v2'
        )
        assert cleanrooms_client.get_configured_table.call_count == 1

    def test_update_clears_description(self, cleanrooms_client, configured_table):
        adapter = self._adapter(cleanrooms_client)
        previous = adapter.create(configured_table)

        adapter.update(previous.model_copy(update={'description': None}), previous)

        cleanrooms_client.update_configured_table.assert_called_once_with(
            configuredTableIdentifier='ct-1', description=''
        )

    def test_cleared_description_settles_after_refresh(self, cleanrooms_client, configured_table,
                                                        configured_table_payload):
        adapter = self._adapter(cleanrooms_client)
        previous = adapter.create(configured_table)
        cleanrooms_client.get_configured_table.return_value = {
            'configuredTable': {**configured_table_payload, 'description': ''}
        }
        desired = previous.model_copy(update={'description': None})

        result = adapter.update(desired, previous)

        assert result.description is None
        assert result.diff(desired) == set()
        assert adapter.update(desired, result) == result
        cleanrooms_client.update_configured_table.assert_called_once()

    def test_read_picks_up_description_removed_remotely(self, cleanrooms_client, configured_table,
                                                         configured_table_payload):
        adapter = self._adapter(cleanrooms_client)
        created = adapter.create(configured_table)
        remote = dict(configured_table_payload)
        del remote['description']
        cleanrooms_client.get_configured_table.return_value = {'configuredTable': remote}

        result = adapter.read(created)

        assert created.description == 'order facts'
        assert result.description is None
        assert result.diff(created) == {'description'}

    def test_empty_description_is_unset(self, configured_table):
        record = type(configured_table).model_validate({**configured_table.model_dump(), 'description': ''})
        assert record.description is None

    def test_tag_update_uses_maps(self, cleanrooms_client, configured_table):
        adapter = self._adapter(cleanrooms_client)
        previous = adapter.create(configured_table.model_copy(update={'tags': {'env': 'dev'}}))

        adapter.update(previous.model_copy(update={'tags': {'owner': 'me'}}), previous)

        cleanrooms_client.untag_resource.assert_called_once_with(resourceArn=TABLE_ARN, tagKeys=['env'])
        cleanrooms_client.tag_resource.assert_called_once_with(resourceArn=TABLE_ARN, tags={'owner': 'me'})
        cleanrooms_client.update_configured_table.assert_not_called()

    def test_delete_errors_carry_identifier(self, cleanrooms_client, configured_table, client_error):
        cleanrooms_client.delete_configured_table.side_effect = client_error(
            'ConflictException', 'DeleteConfiguredTable'
        )
        state = configured_table.model_copy(update={'id': 'ct-1'})

        with pytest.raises(RemoteError) as exc_info:
            self._adapter(cleanrooms_client).delete(state)
        assert exc_info.value.resource_id == 'ct-1'

    def test_delete_missing_table(self, cleanrooms_client, configured_table, client_error):
        cleanrooms_client.delete_configured_table.side_effect = client_error(
            'ResourceNotFoundException', 'DeleteConfiguredTable'
        )
        self._adapter(cleanrooms_client).delete(configured_table.model_copy(update={'id': 'ct-1'}))

    def test_sweep_pages(self, cleanrooms_client):
        cleanrooms_client.list_configured_tables.side_effect = [
            {'configuredTableSummaries': [{'id': 'ct-1'}, {'id': 'ct-2'}], 'nextToken': 'n1'},
            {'configuredTableSummaries': [{'id': 'ct-3'}]},
        ]

        resources = self._adapter(cleanrooms_client).sweep()

        assert [r.identifier for r in resources] == ['ct-1', 'ct-2', 'ct-3']
        cleanrooms_client.list_configured_tables.assert_any_call(maxResults=MAX_PAGE_SIZE)
        cleanrooms_client.list_configured_tables.assert_any_call(maxResults=MAX_PAGE_SIZE, nextToken='n1')
