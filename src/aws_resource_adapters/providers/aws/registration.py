"""Resource type registry.

Maps type names to definition factories and builds adapters and sweepers
wired to a shared ``AWSClient`` and the application configuration.
"""
import dataclasses
import logging
from typing import Callable, Dict, Optional

from aws_resource_adapters.config.schemas import AppConfig
from aws_resource_adapters.infrastructure.adapters.definition import ResourceDefinition
from aws_resource_adapters.infrastructure.adapters.resource_adapter import ResourceAdapter
from aws_resource_adapters.infrastructure.exceptions import ConfigurationError
from aws_resource_adapters.infrastructure.sweep import SweeperRegistry
from aws_resource_adapters.providers.aws.aws_client import AWSClient
from aws_resource_adapters.providers.aws.resources import cleanrooms_configured_table, sesv2_tenant

logger = logging.getLogger(__name__)

DefinitionFactory = Callable[..., ResourceDefinition]

RESOURCE_DEFINITIONS: Dict[str, DefinitionFactory] = {
    sesv2_tenant.RESOURCE_TYPE: sesv2_tenant.tenant_definition,
    cleanrooms_configured_table.RESOURCE_TYPE: cleanrooms_configured_table.configured_table_definition,
}


def resource_types():
    return sorted(RESOURCE_DEFINITIONS)


def get_definition(type_name: str, config: Optional[AppConfig] = None) -> ResourceDefinition:
    """
    Build the definition for ``type_name`` with configured page size and timeouts applied.

    Raises:
        ConfigurationError: If the type name is not registered
    """
    try:
        factory = RESOURCE_DEFINITIONS[type_name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown resource type '{type_name}', expected one of {resource_types()}"
        ) from None

    config = config or AppConfig()
    definition = factory(page_size=config.sweep.page_size) if config.sweep.page_size else factory()

    overrides = config.timeouts.resources.get(type_name)
    if overrides is not None:
        values = {k: v for k, v in overrides.model_dump().items() if v is not None}
        timeouts = dataclasses.replace(definition.timeouts, **values)
        definition = dataclasses.replace(definition, timeouts=timeouts)
    return definition


def build_adapter(type_name: str, aws_client: AWSClient,
                  config: Optional[AppConfig] = None) -> ResourceAdapter:
    """Build an adapter for ``type_name`` using the session-scoped ``aws_client``."""
    config = config or AppConfig()
    definition = get_definition(type_name, config)
    return ResourceAdapter(
        definition,
        aws_client.get_client(definition.service),
        default_tags=config.tags.default_tags,
        ignore_tag_prefixes=config.tags.ignore_key_prefixes,
    )


def register_sweepers(registry: SweeperRegistry, aws_client: AWSClient,
                      config: Optional[AppConfig] = None) -> SweeperRegistry:
    """Register a sweeper for every known resource type."""
    for type_name in resource_types():
        adapter = build_adapter(type_name, aws_client, config)
        registry.register(type_name, adapter.sweep)
        logger.debug("Registered sweeper for %s", type_name)
    return registry


__all__ = [
    'RESOURCE_DEFINITIONS',
    'build_adapter',
    'get_definition',
    'register_sweepers',
    'resource_types',
]
