"""Generic resource adapter and resource definitions."""
from .definition import ResourceApi, ResourceDefinition, ResourceTimeouts, UpdatableResourceApi
from .resource_adapter import ResourceAdapter

__all__: list = ["ResourceAdapter", "ResourceApi", "ResourceDefinition", "ResourceTimeouts", "UpdatableResourceApi"]
