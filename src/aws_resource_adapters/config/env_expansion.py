"""Environment variable expansion for configuration values."""
import os
import re
from typing import Any, Dict

# ${VAR}, ${VAR:default} or $VAR
_ENV_PATTERN = re.compile(r"\$\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<default>[^}]*))?\}|\$(?P<bare>[A-Za-z_][A-Za-z0-9_]*)")


def _replace(match: "re.Match[str]") -> str:
    name = match.group("braced") or match.group("bare")
    default = match.group("default")
    if name in os.environ:
        return os.environ[name]
    if default is not None:
        return default
    # Unset variables without a default are left as written
    return match.group(0)


def expand_env_vars(value: Any) -> Any:
    """
    Expand environment variables in strings, recursively through dicts and lists.

    Non-string scalars are returned unchanged.
    """
    if isinstance(value, str):
        return _ENV_PATTERN.sub(_replace, value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(v) for v in value]
    return value


def expand_config_env_vars(config: Dict[str, Any]) -> Dict[str, Any]:
    """Expand every environment variable reference in a configuration dictionary."""
    return expand_env_vars(config)
