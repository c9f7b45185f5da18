"""SES v2 tenant desired state record."""
from typing import Optional

from pydantic import field_validator

from aws_resource_adapters.domain.base.model import Attribute, ResourceModel


class TenantModel(ResourceModel):
    """Desired state of an ``aws_sesv2_tenant``.

    The import identifier is the tenant name.
    """

    arn: Optional[str] = Attribute(None, computed=True, description="ARN of the Tenant")
    created_timestamp: Optional[str] = Attribute(
        None, computed=True, description="The timestamp of when the Tenant was created"
    )
    id: Optional[str] = Attribute(None, computed=True, description="Identifier assigned by SES")
    sending_status: Optional[str] = Attribute(
        None, computed=True,
        description="The sending status of the tenant. ENABLED, DISABLED, or REINSTATED",
    )
    tenant_name: str = Attribute(requires_replace=True, description="Name of the Tenant")

    @field_validator("tenant_name")
    @classmethod
    def validate_tenant_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("tenant_name must not be empty")
        return v
