"""Tag collaborators for the two AWS tagging conventions.

SES v2 exchanges tags as ``[{"Key": ..., "Value": ...}]`` lists with
PascalCase parameters; Clean Rooms uses plain maps with camelCase parameters.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from aws_resource_adapters.infrastructure.mapping import tags_from_list, tags_to_list
from aws_resource_adapters.infrastructure.tags import diff_tags

logger = logging.getLogger(__name__)


class TagReconciler(ABC):
    """Base class for tag collaborators."""

    def update_tags(self, client: Any, arn: str, old: Dict[str, str], new: Dict[str, str]) -> None:
        """Untag removed keys, then tag added or changed keys."""
        to_set, to_remove = diff_tags(old or {}, new or {})
        if to_remove:
            logger.debug("Untagging %s: %s", arn, to_remove)
            self._untag(client, arn, to_remove)
        if to_set:
            logger.debug("Tagging %s: %s", arn, sorted(to_set))
            self._tag(client, arn, to_set)

    @abstractmethod
    def list_tags(self, client: Any, arn: str) -> Dict[str, str]:
        """Get the tags currently set on ``arn``."""

    @abstractmethod
    def _tag(self, client: Any, arn: str, tags: Dict[str, str]) -> None:
        ...

    @abstractmethod
    def _untag(self, client: Any, arn: str, keys: List[str]) -> None:
        ...


class SESv2TagReconciler(TagReconciler):
    """Tags for SES v2 resources."""

    def list_tags(self, client: Any, arn: str) -> Dict[str, str]:
        response = client.list_tags_for_resource(ResourceArn=arn)
        return tags_from_list(response.get('Tags', []))

    def _tag(self, client: Any, arn: str, tags: Dict[str, str]) -> None:
        client.tag_resource(ResourceArn=arn, Tags=tags_to_list(tags))

    def _untag(self, client: Any, arn: str, keys: List[str]) -> None:
        client.untag_resource(ResourceArn=arn, TagKeys=keys)


class CleanRoomsTagReconciler(TagReconciler):
    """Tags for Clean Rooms resources."""

    def list_tags(self, client: Any, arn: str) -> Dict[str, str]:
        response = client.list_tags_for_resource(resourceArn=arn)
        return dict(response.get('tags', {}) or {})

    def _tag(self, client: Any, arn: str, tags: Dict[str, str]) -> None:
        client.tag_resource(resourceArn=arn, tags=tags)

    def _untag(self, client: Any, arn: str, keys: List[str]) -> None:
        client.untag_resource(resourceArn=arn, tagKeys=keys)
