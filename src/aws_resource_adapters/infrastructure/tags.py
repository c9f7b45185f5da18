"""Key/value tag helpers shared by the tag collaborators."""
from typing import Dict, Iterable, List, Optional, Tuple

IGNORED_KEY_PREFIXES: Tuple[str, ...] = ("aws:",)


def strip_ignored(tags: Optional[Dict[str, str]],
                  prefixes: Iterable[str] = IGNORED_KEY_PREFIXES) -> Dict[str, str]:
    """Drop system tags (``aws:*``) that can never be managed."""
    prefixes = tuple(prefixes)
    return {k: v for k, v in (tags or {}).items() if not k.startswith(prefixes)}


def merge_tags(default_tags: Optional[Dict[str, str]],
               resource_tags: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Provider default tags overlaid with resource tags (resource wins)."""
    merged = dict(default_tags or {})
    merged.update(resource_tags or {})
    return merged


def resource_tags(all_tags: Dict[str, str], default_tags: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Tags owned by the resource: everything not inherited unchanged from the defaults."""
    default_tags = default_tags or {}
    return {k: v for k, v in all_tags.items() if default_tags.get(k) != v}


def diff_tags(old: Dict[str, str], new: Dict[str, str]) -> Tuple[Dict[str, str], List[str]]:
    """Return ``(to_set, to_remove)`` that turns ``old`` into ``new``."""
    to_set = {k: v for k, v in new.items() if old.get(k) != v}
    to_remove = sorted(k for k in old if k not in new)
    return to_set, to_remove
