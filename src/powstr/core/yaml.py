"""YAML configuration loading for powstr.

Provides safe YAML file loading using ``yaml.safe_load`` to prevent
arbitrary code execution from untrusted YAML content. Used by
[BaseService.from_yaml()][powstr.core.base_service.BaseService.from_yaml]
and the command line's ``--config`` option.

Examples:
    ```python
    from powstr.core.yaml import load_yaml

    config = load_yaml("config/powstr.yaml")
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


def load_yaml(config_path: str) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    Args:
        config_path: Path to the YAML file (absolute or relative).

    Returns:
        Parsed configuration as a dictionary. Returns an empty dict if the
        file exists but contains no data.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file contains invalid YAML syntax.
        ConfigurationError: If the top-level YAML value is not a mapping.

    Warning:
        This function does not validate the structure of the returned
        dictionary. Callers pass it to a Pydantic model
        ([PowstrConfig][powstr.services.common.configs.PowstrConfig] or a
        service config) for schema validation.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")
    return data
