"""Environment variable expansion for configuration values."""
import os
import re
from typing import Any, Dict

_ENV_PATTERN = re.compile(r"\$(\w+)|\$\{(\w+)\}")


def expand_env_vars(value: Any) -> Any:
    """
    Expand $VAR and ${VAR} references recursively.

    Unknown variables are left as written. Non-string scalars are returned
    unchanged; dictionaries and lists are expanded element by element.

    Args:
        value: String, list, dictionary or scalar

    Returns:
        Value with environment references expanded
    """
    if isinstance(value, str):
        def replace(match: "re.Match[str]") -> str:
            name = match.group(1) or match.group(2)
            return os.environ.get(name, match.group(0))

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def expand_config_env_vars(config: Dict[str, Any]) -> Dict[str, Any]:
    """Expand environment references throughout a configuration dictionary."""
    return expand_env_vars(config)
