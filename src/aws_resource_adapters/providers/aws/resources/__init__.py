"""Concrete AWS resource definitions."""
from .cleanrooms_configured_table import CONFIGURED_TABLE
from .sesv2_tenant import TENANT

__all__: list = ["CONFIGURED_TABLE", "TENANT"]
