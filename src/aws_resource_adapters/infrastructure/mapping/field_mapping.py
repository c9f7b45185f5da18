"""Declarative field mapping between desired state records and AWS API payloads.

A mapping table lists, for each local attribute, how it corresponds to the
remote payload:

- COPY: same attribute, remote name derived from the local snake_case name
  using the service naming convention (PascalCase for SES v2, camelCase for
  Clean Rooms).
- RENAME: explicit remote name. Dotted names address nested structures,
  e.g. ``tableReference.glue``.
- IGNORE: intentionally absent on the other side (tags, timestamps handled
  elsewhere). Kept in the table so the intent is visible.

``expand`` builds request parameters from a record; ``flatten`` extracts
local values from a response. Unknown remote keys are dropped.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Type

from pydantic import BaseModel

from aws_resource_adapters.infrastructure.exceptions import ConfigurationError


class MappingKind(str, Enum):
    """Field mapping kinds."""
    COPY = "copy"
    RENAME = "rename"
    IGNORE = "ignore"


class NamingConvention(str, Enum):
    """Remote naming conventions used by AWS service models."""
    PASCAL = "pascal"
    CAMEL = "camel"


def convert_name(local: str, convention: NamingConvention) -> str:
    """Convert a snake_case attribute name to the remote convention."""
    parts = [p for p in local.split("_") if p]
    pascal = "".join(p[:1].upper() + p[1:] for p in parts)
    if convention == NamingConvention.CAMEL:
        return pascal[:1].lower() + pascal[1:]
    return pascal


@dataclass(frozen=True)
class FieldMap:
    """One row of a mapping table."""
    local: str
    remote: Optional[str] = None
    kind: MappingKind = MappingKind.COPY
    to_remote: Optional[Callable[[Any], Any]] = None
    from_remote: Optional[Callable[[Any], Any]] = None
    # Sent instead of an unset value, e.g. "" to clear an optional string.
    null_value: Any = None
    # Skip empty collections instead of sending them.
    omit_empty: bool = False


def copy(local: str, **converters) -> FieldMap:
    return FieldMap(local=local, kind=MappingKind.COPY, **converters)


def rename(local: str, remote: str, **converters) -> FieldMap:
    return FieldMap(local=local, remote=remote, kind=MappingKind.RENAME, **converters)


def ignore(local: str) -> FieldMap:
    return FieldMap(local=local, kind=MappingKind.IGNORE)


_MISSING = object()


def _get_path(data: Dict[str, Any], path: List[str]) -> Any:
    current: Any = data
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _set_path(data: Dict[str, Any], path: List[str], value: Any) -> None:
    current = data
    for key in path[:-1]:
        current = current.setdefault(key, {})
    current[path[-1]] = value


class FieldMapping:
    """A mapping table for one direction of one resource type."""

    def __init__(self, fields: Iterable[FieldMap],
                 convention: NamingConvention = NamingConvention.PASCAL):
        self.fields: List[FieldMap] = list(fields)
        self.convention = convention

        seen = set()
        for field in self.fields:
            if field.local in seen:
                raise ConfigurationError(f"Duplicate mapping for attribute '{field.local}'")
            seen.add(field.local)
            if field.kind == MappingKind.RENAME and not field.remote:
                raise ConfigurationError(f"Rename mapping for '{field.local}' has no remote name")

    def remote_name(self, field: FieldMap) -> str:
        if field.kind == MappingKind.RENAME:
            return field.remote
        return convert_name(field.local, self.convention)

    @property
    def mapped_attributes(self) -> FrozenSet[str]:
        """Local attributes that actually travel through this mapping."""
        return frozenset(f.local for f in self.fields if f.kind != MappingKind.IGNORE)

    def validate_for(self, model: Type[BaseModel], required: Iterable[str], direction: str) -> None:
        """Fail at definition time if the table does not fit ``model``.

        Raises:
            ConfigurationError: If an entry names an unknown attribute or a
                required attribute has no (non-ignored) mapping.
        """
        unknown = [f.local for f in self.fields if f.local not in model.model_fields]
        if unknown:
            raise ConfigurationError(
                f"{model.__name__} {direction} mapping names unknown attributes: {', '.join(sorted(unknown))}"
            )
        missing = sorted(set(required) - self.mapped_attributes)
        if missing:
            raise ConfigurationError(
                f"{model.__name__} {direction} mapping is missing required attributes: {', '.join(missing)}",
            )

    def expand(self, record: BaseModel, only: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Build request parameters from ``record``.

        Args:
            record: Source record
            only: Restrict the output to these local attributes

        Returns:
            Request parameters; unset (None) attributes are skipped unless
            their entry declares a ``null_value``
        """
        selected = set(only) if only is not None else None
        params: Dict[str, Any] = {}
        for field in self.fields:
            if field.kind == MappingKind.IGNORE:
                continue
            if selected is not None and field.local not in selected:
                continue
            value = getattr(record, field.local, None)
            if field.omit_empty and not value:
                continue
            if value is None:
                if field.null_value is None:
                    continue
                value = field.null_value
            elif field.to_remote is not None:
                value = field.to_remote(value)
            elif isinstance(value, BaseModel):
                value = value.model_dump()
            _set_path(params, self.remote_name(field).split("."), value)
        return params

    def flatten(self, remote: Dict[str, Any], complete: bool = False) -> Dict[str, Any]:
        """Extract local attribute values from a remote payload.

        Args:
            remote: Response payload
            complete: The payload is the full remote state (a Get response),
                so attributes it leaves out are returned as None. Otherwise
                only attributes present in ``remote`` are returned.

        Conversion errors propagate before the caller has touched any record.
        """
        values: Dict[str, Any] = {}
        for field in self.fields:
            if field.kind == MappingKind.IGNORE:
                continue
            value = _get_path(remote, self.remote_name(field).split("."))
            if value is _MISSING:
                if complete:
                    values[field.local] = None
                continue
            if field.from_remote is not None and value is not None:
                value = field.from_remote(value)
            values[field.local] = value
        return values
