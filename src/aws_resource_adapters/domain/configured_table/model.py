"""Clean Rooms configured table desired state record."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aws_resource_adapters.domain.base.model import Attribute, ResourceModel

ANALYSIS_METHOD_DIRECT_QUERY = "DIRECT_QUERY"
VALID_ANALYSIS_METHODS = (ANALYSIS_METHOD_DIRECT_QUERY,)

MAX_ALLOWED_COLUMNS = 225


class TableReference(BaseModel):
    """AWS Glue table backing a configured table."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    database_name: str = Field(min_length=1)
    table_name: str = Field(min_length=1)


class ConfiguredTableModel(ResourceModel):
    """Desired state of an ``aws_cleanrooms_configured_table``.

    The import identifier is the configured table id.
    """

    allowed_columns: List[str] = Attribute(
        requires_replace=True, min_length=1, max_length=MAX_ALLOWED_COLUMNS,
        description="Columns of the referenced table that can be queried",
    )
    # UpdateConfiguredTable does not accept the analysis method.
    analysis_method: str = Attribute(requires_replace=True, description="Analysis method of the table")
    arn: Optional[str] = Attribute(None, computed=True)
    create_time: Optional[str] = Attribute(None, computed=True)
    description: Optional[str] = Attribute(None)
    id: Optional[str] = Attribute(None, computed=True)
    name: str = Attribute(min_length=1)
    table_reference: TableReference = Attribute(requires_replace=True)
    update_time: Optional[str] = Attribute(None, computed=True)

    @field_validator("allowed_columns")
    @classmethod
    def normalize_allowed_columns(cls, v: List[str]) -> List[str]:
        """Allowed columns are a set: order and duplicates carry no meaning."""
        return sorted(set(v))

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: Optional[str]) -> Optional[str]:
        """An empty description is stored remotely as no description."""
        return v or None

    @field_validator("analysis_method")
    @classmethod
    def validate_analysis_method(cls, v: str) -> str:
        if v not in VALID_ANALYSIS_METHODS:
            raise ValueError(
                f"Invalid analysis method {v!r}. The only valid value is currently "
                f"{ANALYSIS_METHOD_DIRECT_QUERY!r}"
            )
        return v
