"""Base resource model - declarative attribute roles on top of pydantic.

Every desired state record is a pydantic model whose fields carry their
lifecycle role in ``json_schema_extra``:

- ``computed``: assigned by the remote API, never sent in a request and
  never part of a diff.
- ``requires_replace``: accepted on create only; any change means the
  resource has to be destroyed and recreated.

Fields without a default are required. ``tags`` and ``tags_all`` are tag
metadata handled by the tag collaborator rather than by field mapping.
"""
from typing import Any, Dict, FrozenSet, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

TAG_ATTRIBUTES: FrozenSet[str] = frozenset({"tags", "tags_all"})


def Attribute(default: Any = ..., *, computed: bool = False, requires_replace: bool = False,
              description: Optional[str] = None, **kwargs: Any) -> Any:
    """Declare a record attribute with its lifecycle role."""
    extra = {"computed": computed, "requires_replace": requires_replace}
    if "default_factory" in kwargs:
        return Field(description=description, json_schema_extra=extra, **kwargs)
    return Field(default, description=description, json_schema_extra=extra, **kwargs)


class ResourceModel(BaseModel):
    """Base class for all desired state records."""
    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    tags: Dict[str, str] = Attribute(default_factory=dict, description="Resource tags")
    tags_all: Dict[str, str] = Attribute(
        default_factory=dict, computed=True,
        description="Resource tags merged with the provider default tags",
    )

    @classmethod
    def _has_flag(cls, name: str, flag: str) -> bool:
        extra = cls.model_fields[name].json_schema_extra
        return isinstance(extra, dict) and bool(extra.get(flag))

    @classmethod
    def computed_attributes(cls) -> FrozenSet[str]:
        return frozenset(n for n in cls.model_fields if cls._has_flag(n, "computed"))

    @classmethod
    def immutable_attributes(cls) -> FrozenSet[str]:
        return frozenset(n for n in cls.model_fields if cls._has_flag(n, "requires_replace"))

    @classmethod
    def required_attributes(cls) -> FrozenSet[str]:
        return frozenset(n for n, f in cls.model_fields.items() if f.is_required())

    def diff(self, previous: "ResourceModel") -> Set[str]:
        """Names of non-computed attributes whose values differ from ``previous``."""
        computed = self.computed_attributes()
        return {
            name for name in type(self).model_fields
            if name not in computed and getattr(self, name) != getattr(previous, name, None)
        }
