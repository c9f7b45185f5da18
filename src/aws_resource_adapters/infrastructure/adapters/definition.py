"""Resource definitions - the per-type triple of model, mapping tables and API binding."""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Protocol, Tuple, Type, TypeVar

from aws_resource_adapters.domain.base.model import TAG_ATTRIBUTES, ResourceModel
from aws_resource_adapters.domain.base.ports import TaggingPort
from aws_resource_adapters.infrastructure.exceptions import ConfigurationError
from aws_resource_adapters.infrastructure.mapping import FieldMapping
from aws_resource_adapters.infrastructure.waiters import ResourceWaiters

M = TypeVar("M", bound=ResourceModel)


class ResourceApi(Protocol):
    """Calls a resource type makes against its boto3 service client.

    ``get`` and ``delete`` raise ResourceNotFoundError when the object is
    absent; ``get`` raises EmptyOutputError when the payload is missing.
    Any other botocore error is left to the adapter.
    """

    def create(self, client: Any, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...

    def get(self, client: Any, identifier: str) -> Dict[str, Any]:
        ...

    def delete(self, client: Any, identifier: str) -> None:
        ...

    def list_page(self, client: Any, token: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        ...


class UpdatableResourceApi(ResourceApi, Protocol):
    """A ResourceApi whose resource type can be updated in place."""

    def update(self, client: Any, identifier: str, params: Dict[str, Any]) -> None:
        ...


@dataclass(frozen=True)
class ResourceTimeouts:
    """Default per-operation deadlines in seconds (None means no deadline)."""
    create: Optional[float] = None
    read: Optional[float] = None
    update: Optional[float] = None
    delete: Optional[float] = None


@dataclass(frozen=True)
class ResourceDefinition(Generic[M]):
    """Everything the generic adapter needs to manage one resource type."""

    type_name: str
    name: str
    service: str
    model: Type[M]
    api: ResourceApi
    identifier_attribute: str
    # Attribute used to label errors before the identifier is known.
    name_attribute: str
    # Remote key that must be present in a create response.
    output_identifier_key: str
    # Key of the identifier within a list item.
    list_identifier_key: str
    create_request: FieldMapping
    remote_state: FieldMapping
    update_request: Optional[FieldMapping] = None
    tagging: Optional[TaggingPort] = None
    arn_attribute: str = "arn"
    timeouts: ResourceTimeouts = field(default_factory=ResourceTimeouts)
    waiters: ResourceWaiters = field(default_factory=ResourceWaiters)
    import_identifier: str = ""

    def __post_init__(self) -> None:
        model = self.model
        for attr in (self.identifier_attribute, self.name_attribute, self.arn_attribute):
            if attr not in model.model_fields:
                raise ConfigurationError(f"{model.__name__} has no attribute '{attr}'")

        self.create_request.validate_for(model, model.required_attributes(), "create")
        self.remote_state.validate_for(
            model, model.computed_attributes() - TAG_ATTRIBUTES, "read"
        )
        if self.update_request is not None:
            if not callable(getattr(self.api, "update", None)):
                raise ConfigurationError(
                    f"{self.type_name} declares an update mapping but its API has no update call"
                )
            self.update_request.validate_for(model, (), "update")
            immutable = sorted(self.update_request.mapped_attributes & model.immutable_attributes())
            if immutable:
                raise ConfigurationError(
                    f"{model.__name__} update mapping includes immutable attributes: {', '.join(immutable)}"
                )
