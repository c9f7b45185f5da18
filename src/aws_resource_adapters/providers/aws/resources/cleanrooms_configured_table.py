"""Clean Rooms configured table resource (``aws_cleanrooms_configured_table``).

Import identifier: the configured table id.
"""
from typing import Any, Dict, List, Optional, Tuple

from botocore.exceptions import ClientError

from aws_resource_adapters.domain.configured_table import ConfiguredTableModel, TableReference
from aws_resource_adapters.domain.core.exceptions import EmptyOutputError, ResourceNotFoundError
from aws_resource_adapters.infrastructure.adapters.definition import (
    ResourceDefinition,
    ResourceTimeouts,
)
from aws_resource_adapters.infrastructure.mapping import (
    FieldMapping,
    NamingConvention,
    copy,
    empty_to_none,
    format_timestamp,
    ignore,
    rename,
    sorted_unique,
)
from aws_resource_adapters.providers.aws.exceptions import is_error_code
from aws_resource_adapters.providers.aws.tagging import CleanRoomsTagReconciler

RESOURCE_TYPE = "aws_cleanrooms_configured_table"
RES_NAME_CONFIGURED_TABLE = "Configured Table"

NOT_FOUND_CODES = ("ResourceNotFoundException",)
MAX_PAGE_SIZE = 100


def expand_table_reference(reference: TableReference) -> Dict[str, str]:
    return {
        'databaseName': reference.database_name,
        'tableName': reference.table_name,
    }


def flatten_table_reference(glue: Dict[str, Any]) -> TableReference:
    return TableReference(database_name=glue['databaseName'], table_name=glue['tableName'])


class ConfiguredTableApi:
    """Clean Rooms configured table calls."""

    def __init__(self, page_size: int = MAX_PAGE_SIZE):
        self.page_size = page_size

    def create(self, client: Any, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        out = client.create_configured_table(**params)
        if not out:
            return None
        return out.get('configuredTable')

    def get(self, client: Any, identifier: str) -> Dict[str, Any]:
        try:
            out = client.get_configured_table(configuredTableIdentifier=identifier)
        except ClientError as e:
            if is_error_code(e, NOT_FOUND_CODES):
                raise ResourceNotFoundError(RESOURCE_TYPE, identifier, e) from e
            raise

        if not out or not out.get('configuredTable'):
            raise EmptyOutputError(RESOURCE_TYPE, "reading", identifier)
        return out['configuredTable']

    def update(self, client: Any, identifier: str, params: Dict[str, Any]) -> None:
        client.update_configured_table(configuredTableIdentifier=identifier, **params)

    def delete(self, client: Any, identifier: str) -> None:
        try:
            client.delete_configured_table(configuredTableIdentifier=identifier)
        except ClientError as e:
            if is_error_code(e, NOT_FOUND_CODES):
                raise ResourceNotFoundError(RESOURCE_TYPE, identifier, e) from e
            raise

    def list_page(self, client: Any, token: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        params: Dict[str, Any] = {'maxResults': self.page_size}
        if token:
            params['nextToken'] = token
        out = client.list_configured_tables(**params) or {}
        return out.get('configuredTableSummaries', []), out.get('nextToken')


CONFIGURED_TABLE_CREATE_REQUEST = FieldMapping([
    copy("name"),
    copy("description"),
    copy("analysis_method"),
    copy("allowed_columns"),
    rename("table_reference", "tableReference.glue", to_remote=expand_table_reference),
    rename("tags_all", "tags", to_remote=dict, omit_empty=True),
    ignore("tags"),
], NamingConvention.CAMEL)

CONFIGURED_TABLE_REMOTE_STATE = FieldMapping([
    copy("id"),
    copy("arn"),
    copy("name"),
    copy("description", from_remote=empty_to_none),
    copy("analysis_method"),
    copy("allowed_columns", from_remote=sorted_unique),
    rename("table_reference", "tableReference.glue", from_remote=flatten_table_reference),
    copy("create_time", from_remote=format_timestamp),
    copy("update_time", from_remote=format_timestamp),
    ignore("tags"),
    ignore("tags_all"),
], NamingConvention.CAMEL)

CONFIGURED_TABLE_UPDATE_REQUEST = FieldMapping([
    copy("name"),
    copy("description", null_value=""),
], NamingConvention.CAMEL)


def configured_table_definition(page_size: int = MAX_PAGE_SIZE) -> ResourceDefinition[ConfiguredTableModel]:
    return ResourceDefinition(
        type_name=RESOURCE_TYPE,
        name=RES_NAME_CONFIGURED_TABLE,
        service="cleanrooms",
        model=ConfiguredTableModel,
        api=ConfiguredTableApi(page_size=page_size),
        identifier_attribute="id",
        name_attribute="name",
        output_identifier_key="id",
        list_identifier_key="id",
        create_request=CONFIGURED_TABLE_CREATE_REQUEST,
        remote_state=CONFIGURED_TABLE_REMOTE_STATE,
        update_request=CONFIGURED_TABLE_UPDATE_REQUEST,
        tagging=CleanRoomsTagReconciler(),
        timeouts=ResourceTimeouts(create=60, update=60, delete=60),
        import_identifier="the configured table id",
    )


CONFIGURED_TABLE = configured_table_definition()
