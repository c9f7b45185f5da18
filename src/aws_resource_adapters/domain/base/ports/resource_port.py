"""Resource lifecycle ports - contracts between the orchestration engine and adapters."""
from typing import Any, Dict, List, Optional, Protocol, Set, TypeVar, runtime_checkable

from aws_resource_adapters.domain.base.model import ResourceModel

M = TypeVar("M", bound=ResourceModel)


@runtime_checkable
class ResourceAdapterPort(Protocol[M]):
    """Lifecycle interface every resource adapter exposes to the engine."""

    @property
    def type_name(self) -> str:
        """Get the resource type name, e.g. ``aws_sesv2_tenant``."""
        ...

    def create(self, desired: M, context: Optional[Any] = None) -> M:
        """Create the remote resource and return the record with computed fields set."""
        ...

    def read(self, state: M, context: Optional[Any] = None) -> M:
        """Read the remote resource; raises ResourceNotFoundError when it is gone."""
        ...

    def update(self, desired: M, previous: M, context: Optional[Any] = None) -> M:
        """Apply the mutable differences between desired and previous."""
        ...

    def delete(self, state: M, context: Optional[Any] = None) -> None:
        """Delete the remote resource; absence already counts as success."""
        ...

    def import_state(self, identifier: str, context: Optional[Any] = None) -> M:
        """Rebuild a record from its import identifier alone."""
        ...

    def requires_replace(self, desired: M, previous: M) -> Set[str]:
        """Names of changed attributes that force destroy and recreate."""
        ...

    def sweep(self, context: Optional[Any] = None) -> List[Any]:
        """List every remote resource of this type as a deletable handle."""
        ...


@runtime_checkable
class TaggingPort(Protocol):
    """Tag reconciliation collaborator."""

    def list_tags(self, client: Any, arn: str) -> Dict[str, str]:
        """Get the tags currently set on a remote resource."""
        ...

    def update_tags(self, client: Any, arn: str, old: Dict[str, str], new: Dict[str, str]) -> None:
        """Converge remote tags from ``old`` to ``new``."""
        ...
