"""Generic CRUD resource adapter.

One adapter class serves every resource type; the type-specific parts live in
its ``ResourceDefinition``. The adapter converges remote existence toward the
desired state record and never mutates the records it is given: every
operation returns a new record.
"""
import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Set, TypeVar

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as PydanticValidationError

from aws_resource_adapters.domain.base.model import TAG_ATTRIBUTES, ResourceModel
from aws_resource_adapters.domain.core.exceptions import (
    EmptyOutputError,
    ResourceNotFoundError,
    ValidationError,
)
from aws_resource_adapters.infrastructure.adapters.definition import ResourceDefinition
from aws_resource_adapters.infrastructure.context import OperationContext
from aws_resource_adapters.infrastructure.exceptions import ConfigurationError, RemoteError
from aws_resource_adapters.infrastructure.pagination import collect_pages
from aws_resource_adapters.infrastructure.sweep import SweepResource
from aws_resource_adapters.infrastructure.tags import (
    IGNORED_KEY_PREFIXES,
    merge_tags,
    resource_tags,
    strip_ignored,
)
from aws_resource_adapters.infrastructure.waiters import StateChangeWaiter, WaiterSpec

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=ResourceModel)

DEFAULT_WAIT_TIMEOUT = 20 * 60


class ResourceAdapter(Generic[M]):
    """Create/read/update/delete/import/sweep for one resource type."""

    def __init__(self, definition: ResourceDefinition[M], client: Any,
                 default_tags: Optional[Dict[str, str]] = None,
                 ignore_tag_prefixes: Iterable[str] = IGNORED_KEY_PREFIXES):
        """
        Initialize the adapter.

        Args:
            definition: Resource type definition
            client: boto3 client for ``definition.service``, created once per session
            default_tags: Provider-level tags applied to every resource
            ignore_tag_prefixes: Tag key prefixes never read or written
        """
        self.definition = definition
        self.client = client
        self.ignore_tag_prefixes = tuple(ignore_tag_prefixes)
        self.default_tags = strip_ignored(default_tags, self.ignore_tag_prefixes)

    @property
    def type_name(self) -> str:
        return self.definition.type_name

    # Lifecycle operations

    def create(self, desired: M, context: Optional[OperationContext] = None) -> M:
        """
        Create the remote resource.

        Returns:
            ``desired`` with the identifier and computed attributes set

        Raises:
            ValidationError: If ``desired`` is invalid (no remote call is made)
            EmptyOutputError: If the API returned no usable payload
            RemoteError: For any other API failure
        """
        context = self._context(context, self.definition.timeouts.create)
        desired = self._validate(desired)
        label = self._label(desired)
        planned = desired.model_copy(update={"tags_all": self._tags_all(desired.tags)})

        params = self.definition.create_request.expand(planned)
        logger.info("Creating %s (%s)", self.definition.name, label)
        out = self._call("creating", label, context, self.definition.api.create, params)
        if not out or not out.get(self.definition.output_identifier_key):
            raise EmptyOutputError(self.type_name, "creating", label)

        created = self._apply(planned, self.definition.remote_state.flatten(out))
        identifier = self._identifier(created)
        logger.info("Created %s (%s)", self.definition.name, identifier)

        if self.definition.waiters.create is not None:
            remote = self._wait(self.definition.waiters.create, identifier, context)
            created = self._apply(created, self.definition.remote_state.flatten(remote, complete=True))
        return created

    def read(self, state: M, context: Optional[OperationContext] = None) -> M:
        """
        Read the remote resource into a new record.

        Computed and mutable attributes are overwritten, with members the
        response leaves out becoming None; immutable attributes the record
        already holds are preserved. The record is only built once every
        remote call and conversion has succeeded.

        Raises:
            ResourceNotFoundError: If the remote resource does not exist
            RemoteError: For any other API failure
        """
        context = self._context(context, self.definition.timeouts.read)
        identifier = self._identifier(state)
        remote = self._call("reading", identifier, context, self.definition.api.get, identifier)
        values = self.definition.remote_state.flatten(remote, complete=True)

        tagging = self.definition.tagging
        arn = values.get(self.definition.arn_attribute) or getattr(state, self.definition.arn_attribute, None)
        if tagging is not None and arn:
            remote_tags = self._call("reading tags", identifier, context, tagging.list_tags, arn)
            all_tags = strip_ignored(remote_tags, self.ignore_tag_prefixes)
            values["tags_all"] = all_tags
            values["tags"] = resource_tags(all_tags, self.default_tags)

        return self._apply(state, values)

    def refresh(self, state: M, context: Optional[OperationContext] = None) -> Optional[M]:
        """Read, returning None when the resource is gone so the engine drops the record."""
        try:
            return self.read(state, context)
        except ResourceNotFoundError as e:
            logger.warning("%s (%s) not found, removing from state", self.definition.name, e.resource_id)
            return None

    def update(self, desired: M, previous: M, context: Optional[OperationContext] = None) -> M:
        """
        Apply the mutable differences between ``desired`` and ``previous``.

        Immutable attributes never enter the request; the engine decides on
        replacement using ``requires_replace``. Tag-only changes go to the tag
        collaborator and skip the resource API entirely.
        """
        context = self._context(context, self.definition.timeouts.update)
        desired = self._validate(desired)
        identifier = self._identifier(previous)
        model = self.definition.model
        immutable = model.immutable_attributes()

        changed = desired.diff(previous)
        replace = changed & immutable
        if replace:
            logger.warning(
                "%s (%s): changes to %s require replacement and are not sent in the update",
                self.definition.name, identifier, ", ".join(sorted(replace)),
            )

        tags_all = self._tags_all(desired.tags)
        # Remote still holds the previous immutable values until replacement.
        carried = {name: getattr(previous, name, None) for name in model.computed_attributes() | replace}
        carried["tags_all"] = tags_all
        result = desired.model_copy(update=carried)

        if tags_all != previous.tags_all and self.definition.tagging is not None:
            arn = getattr(previous, self.definition.arn_attribute, None)
            if arn:
                logger.info("Updating tags for %s (%s)", self.definition.name, identifier)
                self._call("updating tags", identifier, context,
                           self.definition.tagging.update_tags, arn, previous.tags_all, tags_all)

        mutable_changes = changed - immutable - TAG_ATTRIBUTES
        if not mutable_changes:
            logger.debug("%s (%s): no changes beyond tags", self.definition.name, identifier)
            return result

        if self.definition.update_request is None:
            raise ConfigurationError(f"{self.type_name} does not support in-place updates")

        params = self.definition.update_request.expand(desired, only=mutable_changes)
        logger.info("Updating %s (%s): %s", self.definition.name, identifier, ", ".join(sorted(mutable_changes)))
        self._call("updating", identifier, context, self.definition.api.update, identifier, params)

        if self.definition.waiters.update is not None:
            self._wait(self.definition.waiters.update, identifier, context)
        return self.read(result, context)

    def delete(self, state: M, context: Optional[OperationContext] = None) -> None:
        """Delete the remote resource; an already absent resource is success."""
        self.delete_by_identifier(self._identifier(state), context)

    def delete_by_identifier(self, identifier: str, context: Optional[OperationContext] = None) -> None:
        context = self._context(context, self.definition.timeouts.delete)
        logger.info("Deleting %s (%s)", self.definition.name, identifier)
        try:
            self._call("deleting", identifier, context, self.definition.api.delete, identifier)
        except ResourceNotFoundError:
            logger.debug("%s (%s) already deleted", self.definition.name, identifier)
            return

        if self.definition.waiters.delete is not None:
            self._wait(self.definition.waiters.delete, identifier, context)

    def import_state(self, identifier: str, context: Optional[OperationContext] = None) -> M:
        """
        Rebuild a record from its import identifier.

        Raises:
            ResourceNotFoundError: If nothing exists under ``identifier``
            ValidationError: If the remote object cannot form a valid record
        """
        if not identifier:
            raise ValidationError(f"{self.definition.name} import identifier must not be empty")
        fields = {name: None for name, f in self.definition.model.model_fields.items() if f.is_required()}
        fields[self.definition.identifier_attribute] = identifier
        stub = self.definition.model.model_construct(**fields)
        return self._validate(self.read(stub, context))

    def requires_replace(self, desired: M, previous: M) -> Set[str]:
        return desired.diff(previous) & self.definition.model.immutable_attributes()

    def sweep(self, context: Optional[OperationContext] = None) -> List[SweepResource]:
        """
        List every remote resource of this type as a deletable handle.

        A failed page aborts the enumeration; no partial list is returned.
        """
        context = context or OperationContext.background()
        items = collect_pages(
            lambda token: self._call("listing", self.type_name, context, self.definition.api.list_page, token),
            context,
            f"listing {self.type_name}",
        )
        key = self.definition.list_identifier_key
        return [SweepResource(self.type_name, item[key], self.delete_by_identifier) for item in items]

    # Helpers

    def _context(self, context: Optional[OperationContext], timeout: Optional[float]) -> OperationContext:
        return context if context is not None else OperationContext.with_timeout(timeout)

    def _call(self, operation: str, identifier: str, context: OperationContext,
              func: Callable[..., Any], *args: Any) -> Any:
        """Run one API call, wrapping transport failures with diagnostics."""
        context.check(f"{operation} {self.type_name}")
        try:
            return func(self.client, *args)
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed %s %s (%s): %s", operation, self.definition.name, identifier, e)
            raise RemoteError(self.type_name, operation, identifier, e) from e

    def _validate(self, record: M) -> M:
        try:
            return self.definition.model.model_validate(record.model_dump())
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid {self.definition.name} configuration: {e}", details=e.errors()
            ) from e

    def _identifier(self, record: M) -> str:
        identifier = getattr(record, self.definition.identifier_attribute, None)
        if not identifier:
            raise ValidationError(
                f"{self.definition.name} has no {self.definition.identifier_attribute}"
            )
        return identifier

    def _label(self, record: M) -> str:
        return str(getattr(record, self.definition.name_attribute, None) or "<unknown>")

    def _tags_all(self, tags: Optional[Dict[str, str]]) -> Dict[str, str]:
        return merge_tags(self.default_tags, strip_ignored(tags, self.ignore_tag_prefixes))

    def _apply(self, record: M, values: Dict[str, Any]) -> M:
        immutable = self.definition.model.immutable_attributes()
        update = {
            name: value for name, value in values.items()
            if not (name in immutable and getattr(record, name, None) is not None)
        }
        return record.model_copy(update=update)

    def _wait(self, spec: WaiterSpec, identifier: str, context: OperationContext) -> Optional[Dict[str, Any]]:
        def refresh():
            try:
                remote = self._call("waiting", identifier, context, self.definition.api.get, identifier)
            except ResourceNotFoundError:
                return None, ""
            return remote, spec.status_of(remote)

        remaining = context.remaining()
        waiter = StateChangeWaiter(
            pending=spec.pending,
            target=spec.target,
            refresh=refresh,
            timeout=remaining if remaining is not None else DEFAULT_WAIT_TIMEOUT,
            delay=spec.delay,
            poll_interval=spec.poll_interval,
            not_found_checks=spec.not_found_checks,
            continuous_target_occurrence=spec.continuous_target_occurrence,
            resource_type=self.type_name,
            resource_id=identifier,
        )
        return waiter.wait(context)
