from typing import Any

from protean.utils.globals import current_domain


def custom_setting(name: str, default: Any = None, config=None) -> Any:
    """Read a value from the ``[custom]`` section of the domain configuration."""
    config = config if config is not None else current_domain.config
    custom = config.get("custom") or {}
    return custom.get(name, default)
