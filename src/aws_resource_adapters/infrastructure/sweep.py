"""Sweepers - bulk discovery and deletion of orphaned remote resources.

Interrupted or failed acceptance runs leave resources behind in an account.
Each resource type registers a sweep function listing every remote resource
as a deletable handle; ``run_sweepers`` deletes them.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from aws_resource_adapters.infrastructure.context import OperationContext
from aws_resource_adapters.infrastructure.exceptions import ConfigurationError, SweepError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResource:
    """A deletable handle for one remote resource, keyed by its identifier."""
    type_name: str
    identifier: str
    deleter: Callable[[str, Optional[OperationContext]], None] = field(repr=False, compare=False)

    def delete(self, context: Optional[OperationContext] = None) -> None:
        self.deleter(self.identifier, context)


SweepFunc = Callable[[Optional[OperationContext]], List[SweepResource]]


class SweeperRegistry:
    """Registry of sweep functions keyed by resource type name."""

    def __init__(self) -> None:
        self._sweepers: Dict[str, SweepFunc] = {}

    def register(self, type_name: str, sweeper: SweepFunc) -> None:
        if type_name in self._sweepers:
            raise ConfigurationError(f"Sweeper already registered for {type_name}")
        self._sweepers[type_name] = sweeper

    def get(self, type_name: str) -> SweepFunc:
        try:
            return self._sweepers[type_name]
        except KeyError:
            raise ConfigurationError(f"No sweeper registered for {type_name}") from None

    @property
    def type_names(self) -> List[str]:
        return sorted(self._sweepers)


def run_sweepers(registry: SweeperRegistry,
                 type_names: Optional[Iterable[str]] = None,
                 context: Optional[OperationContext] = None,
                 dry_run: bool = False) -> Dict[str, List[str]]:
    """
    List and delete resources for the selected types.

    A listing error aborts the whole run. Deletion errors are collected and
    raised together after every handle has been attempted.

    Returns:
        Identifiers found per type name (deleted unless ``dry_run``)

    Raises:
        SweepError: If one or more deletions failed
    """
    context = context or OperationContext.background()
    selected = list(type_names) if type_names else registry.type_names
    swept: Dict[str, List[str]] = {}
    failures: List[Tuple[str, str, BaseException]] = []

    for type_name in selected:
        resources = registry.get(type_name)(context)
        logger.info("Sweeping %s: found %s resource(s)", type_name, len(resources))
        swept[type_name] = [r.identifier for r in resources]
        if dry_run:
            continue
        for resource in resources:
            try:
                resource.delete(context)
                logger.info("Swept %s (%s)", type_name, resource.identifier)
            except Exception as e:
                logger.error("Failed to sweep %s (%s): %s", type_name, resource.identifier, e)
                failures.append((type_name, resource.identifier, e))

    if failures:
        raise SweepError(failures)
    return swept
