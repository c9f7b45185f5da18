from .model import (
    ANALYSIS_METHOD_DIRECT_QUERY,
    MAX_ALLOWED_COLUMNS,
    ConfiguredTableModel,
    TableReference,
)

__all__: list = [
    "ANALYSIS_METHOD_DIRECT_QUERY",
    "MAX_ALLOWED_COLUMNS",
    "ConfiguredTableModel",
    "TableReference",
]
