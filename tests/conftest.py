import os
from datetime import datetime, timezone
from typing import Any, Dict

import pytest
from botocore.exceptions import ClientError
from unittest.mock import Mock

from aws_resource_adapters.domain.configured_table import ConfiguredTableModel, TableReference
from aws_resource_adapters.domain.tenant import TenantModel


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    for name in ('AWS_REGION', 'AWS_PROFILE', 'LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def client_error():
    """Factory for botocore ClientErrors with a given error code."""
    def _make(code: str, operation: str = "Operation", message: str = "error") -> ClientError:
        return ClientError({'Error': {'Code': code, 'Message': message}}, operation)
    return _make


@pytest.fixture
def tenant_payload() -> Dict[str, Any]:
    return {
        'TenantName': 'acme',
        'TenantId': 'id-1',
        'TenantArn': 'arn:aws:ses:us-east-1:123456789012:tenant/acme/id-1',
        'CreatedTimestamp': datetime(2024, 1, 1, tzinfo=timezone.utc),
        'SendingStatus': 'ENABLED',
        'Tags': [],
    }


@pytest.fixture
def sesv2_client(tenant_payload):
    """A fake SES v2 client returning ``tenant_payload``."""
    client = Mock()
    client.create_tenant.return_value = dict(tenant_payload)
    client.get_tenant.return_value = {'Tenant': dict(tenant_payload)}
    client.list_tags_for_resource.return_value = {'Tags': []}
    return client


@pytest.fixture
def configured_table_payload() -> Dict[str, Any]:
    return {
        'id': 'ct-1',
        'arn': 'arn:aws:cleanrooms:us-east-1:123456789012:configuredtable/ct-1',
        'name': 'orders',
        'description': 'order facts',
        'analysisMethod': 'DIRECT_QUERY',
        'allowedColumns': ['order_id', 'amount'],
        'tableReference': {'glue': {'databaseName': 'sales', 'tableName': 'orders'}},
        'createTime': datetime(2024, 1, 1, tzinfo=timezone.utc),
        'updateTime': datetime(2024, 1, 2, tzinfo=timezone.utc),
        'analysisRuleTypes': [],
    }


@pytest.fixture
def cleanrooms_client(configured_table_payload):
    """A fake Clean Rooms client returning ``configured_table_payload``."""
    client = Mock()
    client.create_configured_table.return_value = {'configuredTable': dict(configured_table_payload)}
    client.get_configured_table.return_value = {'configuredTable': dict(configured_table_payload)}
    client.update_configured_table.return_value = {'configuredTable': dict(configured_table_payload)}
    client.list_tags_for_resource.return_value = {'tags': {}}
    return client


@pytest.fixture
def tenant():
    return TenantModel(tenant_name='acme')


@pytest.fixture
def configured_table():
    return ConfiguredTableModel(
        name='orders',
        description='order facts',
        analysis_method='DIRECT_QUERY',
        allowed_columns=['order_id', 'amount'],
        table_reference=TableReference(database_name='sales', table_name='orders'),
    )
