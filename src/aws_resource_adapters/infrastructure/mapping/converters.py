"""Value converters shared by the mapping tables."""
from datetime import datetime, timezone
from typing import Any, Dict, List


def format_timestamp(value: Any) -> str:
    """Render a botocore timestamp as RFC 3339 in UTC, e.g. ``2024-01-01T00:00:00Z``."""
    if isinstance(value, str):
        return value
    if not isinstance(value, datetime):
        raise TypeError(f"Expected a datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def tags_to_list(tags: Dict[str, str]) -> List[Dict[str, str]]:
    """``{"k": "v"}`` -> ``[{"Key": "k", "Value": "v"}]``"""
    return [{"Key": k, "Value": v} for k, v in sorted(tags.items())]


def tags_from_list(tags: List[Dict[str, str]]) -> Dict[str, str]:
    return {tag["Key"]: tag.get("Value", "") for tag in tags or []}


def sorted_unique(values: List[str]) -> List[str]:
    return sorted(set(values))


def empty_to_none(value: Any) -> Any:
    """Services echo a cleared optional string back as ``""``; treat it as unset."""
    return value or None
