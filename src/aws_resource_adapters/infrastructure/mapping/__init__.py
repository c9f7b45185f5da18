"""Field mapping between desired state records and AWS API payloads."""
from .converters import empty_to_none, format_timestamp, sorted_unique, tags_from_list, tags_to_list
from .field_mapping import (
    FieldMap,
    FieldMapping,
    MappingKind,
    NamingConvention,
    convert_name,
    copy,
    ignore,
    rename,
)

__all__: list = [
    "FieldMap",
    "FieldMapping",
    "MappingKind",
    "NamingConvention",
    "convert_name",
    "copy",
    "ignore",
    "rename",
    "empty_to_none",
    "format_timestamp",
    "sorted_unique",
    "tags_from_list",
    "tags_to_list",
]
