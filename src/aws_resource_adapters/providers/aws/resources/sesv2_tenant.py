"""SES v2 tenant resource (``aws_sesv2_tenant``).

Import identifier: the tenant name. Every input is immutable, so the
resource has no update call; tag changes go through the tag collaborator.
"""
from typing import Any, Dict, List, Optional, Tuple

from botocore.exceptions import ClientError

from aws_resource_adapters.domain.core.exceptions import EmptyOutputError, ResourceNotFoundError
from aws_resource_adapters.domain.tenant import TenantModel
from aws_resource_adapters.infrastructure.adapters.definition import ResourceDefinition
from aws_resource_adapters.infrastructure.mapping import (
    FieldMapping,
    NamingConvention,
    copy,
    format_timestamp,
    ignore,
    rename,
    tags_to_list,
)
from aws_resource_adapters.providers.aws.exceptions import is_error_code
from aws_resource_adapters.providers.aws.tagging import SESv2TagReconciler

RESOURCE_TYPE = "aws_sesv2_tenant"
RES_NAME_TENANT = "Tenant"

NOT_FOUND_CODES = ("NotFoundException",)


class TenantApi:
    """SES v2 tenant calls."""

    def __init__(self, page_size: Optional[int] = None):
        self.page_size = page_size

    def create(self, client: Any, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        # CreateTenant returns the tenant attributes at the top level.
        return client.create_tenant(**params)

    def get(self, client: Any, identifier: str) -> Dict[str, Any]:
        try:
            out = client.get_tenant(TenantName=identifier)
        except ClientError as e:
            if is_error_code(e, NOT_FOUND_CODES):
                raise ResourceNotFoundError(RESOURCE_TYPE, identifier, e) from e
            raise

        if not out or not out.get('Tenant'):
            raise EmptyOutputError(RESOURCE_TYPE, "reading", identifier)
        return out['Tenant']

    def delete(self, client: Any, identifier: str) -> None:
        try:
            client.delete_tenant(TenantName=identifier)
        except ClientError as e:
            if is_error_code(e, NOT_FOUND_CODES):
                raise ResourceNotFoundError(RESOURCE_TYPE, identifier, e) from e
            raise

    def list_page(self, client: Any, token: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        params: Dict[str, Any] = {}
        if self.page_size:
            params['PageSize'] = self.page_size
        if token:
            params['NextToken'] = token
        out = client.list_tenants(**params) or {}
        return out.get('Tenants', []), out.get('NextToken')


TENANT_CREATE_REQUEST = FieldMapping([
    copy("tenant_name"),
    rename("tags_all", "Tags", to_remote=tags_to_list, omit_empty=True),
    ignore("tags"),
], NamingConvention.PASCAL)

TENANT_REMOTE_STATE = FieldMapping([
    rename("id", "TenantId"),
    rename("arn", "TenantArn"),
    copy("tenant_name"),
    copy("created_timestamp", from_remote=format_timestamp),
    copy("sending_status"),
    ignore("tags"),
    ignore("tags_all"),
], NamingConvention.PASCAL)


def tenant_definition(page_size: Optional[int] = None) -> ResourceDefinition[TenantModel]:
    return ResourceDefinition(
        type_name=RESOURCE_TYPE,
        name=RES_NAME_TENANT,
        service="sesv2",
        model=TenantModel,
        api=TenantApi(page_size=page_size),
        identifier_attribute="tenant_name",
        name_attribute="tenant_name",
        output_identifier_key="TenantId",
        list_identifier_key="TenantName",
        create_request=TENANT_CREATE_REQUEST,
        remote_state=TENANT_REMOTE_STATE,
        tagging=SESv2TagReconciler(),
        import_identifier="the tenant name",
    )


TENANT = tenant_definition()
